"""
Configuration for the relaynode SDK.

Uses pydantic-settings for environment variable loading. All settings
have defaults suitable for local development; set RELAYNODE_* variables
to override them.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

LOG_FORMATS = {
    "text": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "json": '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
}


class Settings(BaseSettings):
    """SDK configuration loaded from environment."""

    # Node behavior
    strict_updates: bool = Field(
        default=False,
        description="Reject update expressions naming fields the type does not declare",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level for setup_logging()")
    log_format: str = Field(default="text", description="Log line format: text or json")

    model_config = {"env_prefix": "RELAYNODE_"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment once per process.

    Call ``get_settings.cache_clear()`` to pick up environment changes.
    """
    return Settings()


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging for applications embedding the SDK.

    The SDK itself never installs handlers; call this from an
    application entry point or a test session.

    Args:
        settings: Settings to use, loaded from the environment if omitted
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    fmt = LOG_FORMATS.get(settings.log_format, LOG_FORMATS["text"])

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]
