"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

DEFAULT_STORAGE_PATH = Path.home() / ".local" / "share" / "notes-mini" / "notes.json"

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from NOTES_* variables or a .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "NOTES_",
        "extra": "ignore",
    }

    # Storage
    storage_path: Path = DEFAULT_STORAGE_PATH
    record_format: Literal["json", "pipe"] = "json"

    # Logging
    log_level: str = "INFO"
    cli_log_level: str = "WARNING"

    # MCP server
    mcp_host: str = "127.0.0.1"
    mcp_port: int = 8001


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler used by the CLI and the MCP server."""
    level_no = logging.getLevelName(level.upper())
    if not isinstance(level_no, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(level=level_no, format=LOG_FORMAT)
