"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No wire-format constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import (
    IMAGE_EXPORT_DIR_DEFAULT,
    MAX_CHAPTER_DEPTH,
    MAX_CHAPTER_DEPTH_LIMIT,
    MAX_UPLOAD_BYTES_DEFAULT,
)


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup and passed to the HTTP app and
    the dump tool.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str
    log_level: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    max_chapter_depth: int

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    max_upload_bytes: int
    image_export_dir: str

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if a numeric variable is not an integer or is out
            of range.
        """
        config = AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),

            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",

            max_chapter_depth=int(
                os.environ.get("ID3_MAX_CHAPTER_DEPTH", str(MAX_CHAPTER_DEPTH))
            ),

            max_upload_bytes=int(
                os.environ.get("MAX_UPLOAD_BYTES", str(MAX_UPLOAD_BYTES_DEFAULT))
            ),
            image_export_dir=os.environ.get("IMAGE_EXPORT_DIR", IMAGE_EXPORT_DIR_DEFAULT),
        )

        if not 1 <= config.max_chapter_depth <= MAX_CHAPTER_DEPTH_LIMIT:
            raise ValueError(
                f"ID3_MAX_CHAPTER_DEPTH must be between 1 and "
                f"{MAX_CHAPTER_DEPTH_LIMIT}, got {config.max_chapter_depth}"
            )
        if config.max_upload_bytes <= 0:
            raise ValueError(
                f"MAX_UPLOAD_BYTES must be positive, got {config.max_upload_bytes}"
            )

        return config
