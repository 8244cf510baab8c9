"""
ASGI entry point.

    uvicorn server.asgi:app

A .env file in the working directory is read before the config is built.
"""

from dotenv import load_dotenv

load_dotenv()

# pylint: disable=wrong-import-position
from config import AppConfig
from server.app import create_app

config = AppConfig.load_from_env()
app = create_app(config)
