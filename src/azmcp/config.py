"""Process-wide settings and logging setup."""

from __future__ import annotations

import logging
import sys
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

Transport = Literal["stdio", "http", "sse"]


class Settings(BaseSettings):
    """Server defaults read from ``AZMCP_*`` environment variables.

    Command-line flags take precedence over every value here.
    """

    model_config = SettingsConfigDict(
        env_prefix="AZMCP_",
        extra="ignore",
        case_sensitive=False,
    )

    transport: Transport = Field(
        default="stdio",
        description="Transport used by the MCP server.",
    )
    host: str = Field(default="127.0.0.1", min_length=1)
    port: int = Field(default=5008, ge=1, le=65535)
    path: str = Field(default="/mcp", description="HTTP path for the MCP endpoint.")
    namespaces: list[str] = Field(
        default_factory=list,
        description="Top-level command groups to expose; empty exposes all.",
    )
    read_only: bool = Field(
        default=False,
        description="Only expose tools annotated as read-only.",
    )
    log_level: str = Field(default="WARNING")
    cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0,
        description="Lifetime of cached collaborator lookups (seconds).",
    )


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()


def configure_logging(level: str | int = "WARNING") -> None:
    """Route log records to stderr; stdout carries JSON and stdio traffic."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)
