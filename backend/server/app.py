"""
FastAPI app factory for the chapter reader API.

Responsibilities:
- Build the app around one AppConfig
- Switch JSONL event output on or off
- Allow browser uploads from any origin (read-only API)
- Register routes

Non-responsibilities:
- No decoding (see id3.reader)
- No environment loading beyond AppConfig.load_from_env()
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import AppConfig
from observability import logger

from server.routes import register_routes


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create the API app.

    `config` defaults to AppConfig.load_from_env(); tests pass their own
    so upload limits and chapter depth can be pinned.
    """
    config = config or AppConfig.load_from_env()
    logger.configure(enabled=config.enable_json_logs)

    app = FastAPI(
        title="ID3 Chapter Reader API",
        debug=config.env == "dev",
    )
    app.state.config = config

    # Uploads only; nothing here mutates server state
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    return app
