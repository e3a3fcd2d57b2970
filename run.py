#!/usr/bin/env python3
"""
Start the Dialect Proxy with uvicorn.

HOST, PORT and LOG_LEVEL come from the environment (or a .env file).
"""
import os
import sys
import logging

import uvicorn
from dotenv import load_dotenv

load_dotenv()
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dialect_proxy.main import app

logger = logging.getLogger("DialectProxy.Runner")


def main():
    bind_host = os.getenv("HOST", "0.0.0.0")
    bind_port = int(os.getenv("PORT", "7860"))
    uvicorn_log_level = os.getenv("LOG_LEVEL", "info").lower()

    logger.info(f"Serving on {bind_host}:{bind_port} (log level {uvicorn_log_level})")
    try:
        uvicorn.run(app, host=bind_host, port=bind_port, log_level=uvicorn_log_level, loop="asyncio")
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting.")


if __name__ == "__main__":
    main()
