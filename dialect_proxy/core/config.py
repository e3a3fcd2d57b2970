import os
from dotenv import load_dotenv

load_dotenv()

APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

# Product identification, forwarded to upstreams that require it (OpenRouter)
APP_TITLE = os.getenv("APP_TITLE", "Dialect Proxy")
APP_HOME_URL = os.getenv("APP_HOME_URL", "http://localhost:7860")

LOG_LEVEL_FROM_ENV = os.getenv("LOG_LEVEL", "INFO").upper()

API_TIMEOUT = int(os.getenv("API_TIMEOUT", "600"))
READ_TIMEOUT = float(os.getenv("READ_TIMEOUT", "60.0"))
MAX_CONNECTIONS = int(os.getenv("MAX_CONNECTIONS", "200"))

# 'user' field sent along with image generation requests
IMAGE_CLIENT_USER = os.getenv("IMAGE_CLIENT_USER", "dialect-proxy")

# Upstream API versions
AZURE_CHAT_API_VERSION = "2023-07-01-preview"
AZURE_DEPLOYMENTS_API_VERSION = "2023-03-15-preview"

MODERATION_MODEL = "text-moderation-latest"


def get_server_env(name: str) -> str:
    """
    Read a server-side secret or host fallback at call time.
    Returns an empty string when the variable is unset or blank.
    """
    return (os.getenv(name) or "").strip()
