import logging
import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from contextlib import asynccontextmanager

from .core.config import APP_TITLE, APP_VERSION, LOG_LEVEL_FROM_ENV
from .core.exceptions import DialectProxyError
from .core.http_client import create_http_client
from .api import llms as llms_router

numeric_log_level = getattr(logging, LOG_LEVEL_FROM_ENV.upper(), logging.INFO)

root_logger = logging.getLogger()
root_logger.setLevel(numeric_log_level)

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(
    '%(asctime)s %(levelname)-8s [%(name)s:%(module)s:%(lineno)d] - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
))
root_logger.addHandler(console_handler)

logger = logging.getLogger("DialectProxy.Main")

for lib_logger_name in ["httpx", "httpcore", "uvicorn.access", "watchfiles"]:
    logging.getLogger(lib_logger_name).setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    # routes answer 503 while the shared client is missing
    http_client = create_http_client()
    app_instance.state.http_client = http_client
    logger.info(f"{APP_TITLE} v{APP_VERSION} ready, upstream HTTP client opened.")

    try:
        yield
    finally:
        app_instance.state.http_client = None
        if not http_client.is_closed:
            await http_client.aclose()
        logger.info("Upstream HTTP client closed, shutdown complete.")


app = FastAPI(
    title=APP_TITLE,
    description=f"Adapter over OpenAI-compatible provider dialects, version: {APP_VERSION}",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"]
)

# only responses larger than 500 bytes are compressed
app.add_middleware(GZipMiddleware, minimum_size=500)
logger.info(f"FastAPI {APP_TITLE} v{APP_VERSION} initialized, CORS configured.")


@app.exception_handler(DialectProxyError)
async def dialect_proxy_error_handler(request: Request, exc: DialectProxyError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message, "status": exc.status_code}},
    )


app.include_router(llms_router.router)
logger.info("LLM routes loaded under /llms/openai")


@app.get("/", status_code=200, include_in_schema=False, tags=["Utilities"])
async def root():
    """Service info."""
    return {
        "message": f"{APP_TITLE} API is running",
        "version": APP_VERSION,
        "status": "ok",
        "endpoints": {
            "listModels": "/llms/openai/listModels",
            "chatGenerateWithFunctions": "/llms/openai/chatGenerateWithFunctions",
            "createImages": "/llms/openai/createImages",
            "moderation": "/llms/openai/moderation",
            "health": "/health",
            "docs": "/docs",
        }
    }


@app.get("/health", status_code=200, include_in_schema=False, tags=["Utilities"])
async def health_check(request: Request):
    client_from_state = getattr(request.app.state, "http_client", None)
    client_status = "ok"
    detail_message = "HTTP client initialized and seems operational."

    if client_from_state is None:
        client_status = "error"
        detail_message = "HTTP client not initialized in app.state."
    elif not isinstance(client_from_state, httpx.AsyncClient):
        client_status = "error"
        detail_message = f"Unexpected object type in app.state.http_client: {type(client_from_state)}"
    elif client_from_state.is_closed:
        client_status = "warning"
        detail_message = "HTTP client in app.state is closed."

    return {"status": client_status, "detail": detail_message, "app_version": APP_VERSION}
