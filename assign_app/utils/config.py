"""Runtime configuration for the admin console.

Values come from ``ASSIGNQT_*`` environment variables or a local ``.env``
file. The settings dialog can override the connection fields for the running
session through :meth:`ConsoleConfig.model_copy`.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from assign_app.constants.api_constants import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from assign_app.constants.review_constants import DEFAULT_PAGE_SIZE, PAGE_SIZE_CHOICES


class ConsoleConfig(BaseSettings):
    """Connection, paging and display settings."""

    model_config = SettingsConfigDict(
        env_prefix="ASSIGNQT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = Field(default=DEFAULT_API_BASE_URL)
    api_token: str | None = Field(default=None)
    request_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE)
    log_level: str = Field(default="INFO")
    ui_font_size: int = Field(default=10, ge=8, le=24)

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("api_base_url must not be empty")
        return value.rstrip("/")

    @field_validator("api_token")
    @classmethod
    def _blank_token_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("default_page_size")
    @classmethod
    def _known_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZE_CHOICES:
            raise ValueError(f"default_page_size must be one of {PAGE_SIZE_CHOICES}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalized


def load_config(**overrides) -> ConsoleConfig:
    """Build the configuration from the environment, applying explicit overrides."""
    return ConsoleConfig(**overrides)
