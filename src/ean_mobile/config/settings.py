"""Runtime configuration for the EAN client.

Relies on pydantic-settings so that environment variables (prefixed with ``EAN_``)
can override defaults.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Captures runtime configuration for API access and suggestions."""

    api_base_url: str = Field(
        default="https://api.eancdn.com/ean-services/rs/hotel/v3",
        description="Base URL of the hotel booking API",
    )
    destination_url: str = Field(
        default="https://api.ean.com/ean-services/ajax/destination",
        description="Endpoint used for destination suggestions",
    )
    cid: str = Field(default="55505", description="Affiliate customer identifier")
    api_key: Optional[str] = Field(default=None, description="API key issued to the affiliate")
    minor_rev: int = Field(default=20, description="API minor revision requested")
    locale: str = Field(default="en_US")
    currency_code: str = Field(default="USD")
    request_timeout_s: float = Field(default=30.0, description="HTTP timeout in seconds")
    suggestion_limit: int = Field(default=6, description="Maximum number of cities shown as suggestions")
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))

    model_config = SettingsConfigDict(
        env_prefix="EAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("api_base_url", "destination_url")
    def _normalize_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"{value!r} is not an absolute http(s) URL")
        return value.rstrip("/")

    @field_validator("suggestion_limit")
    def _validate_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("suggestion_limit must be positive")
        return value

    @field_validator("log_dir", mode="before")
    def _expand_log_dir(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    def common_params(self) -> dict[str, str]:
        """Query parameters sent with every API request."""
        params = {
            "cid": self.cid,
            "minorRev": str(self.minor_rev),
            "locale": self.locale,
            "currencyCode": self.currency_code,
        }
        if self.api_key:
            params["apiKey"] = self.api_key
        else:
            logger.debug("No API key configured; requests will be sent without apiKey")
        return params
