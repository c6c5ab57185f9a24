"""Pydantic Settings configuration.

Config hierarchy (lowest to highest priority):
1. Pydantic defaults (in code below)
2. .env file (loaded by Pydantic Settings)
3. Environment variables (e.g., ALPACA_API_KEY, ALPACA_PAPER=false)
4. Keyword arguments passed to ClientConfig(...)

Host URLs follow ``paper`` unless overridden explicitly.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PAPER_API_URL = "https://paper-api.alpaca.markets"
LIVE_API_URL = "https://api.alpaca.markets"
DATA_API_URL = "https://data.alpaca.markets/v1"
PAPER_STREAM_URL = "wss://paper-api.alpaca.markets/stream"
LIVE_STREAM_URL = "wss://api.alpaca.markets/stream"

VALID_API_VERSIONS = frozenset({"v2"})
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})


class ClientConfig(BaseSettings):
    """Client configuration.

    Env var examples:
        ALPACA_API_KEY=your-key
        ALPACA_SECRET_KEY=your-secret
        ALPACA_PAPER=false
        ALPACA_TIMEOUT=10
    """

    model_config = SettingsConfigDict(
        env_prefix="ALPACA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = ""
    secret_key: str = ""
    paper: bool = True
    api_version: str = "v2"
    base_url: str | None = None
    data_url: str = DATA_API_URL
    stream_url: str | None = None
    timeout: float = Field(default=30.0, gt=0, le=300)
    max_workers: int = Field(default=4, ge=1, le=64)
    handshake_timeout: float = Field(default=10.0, gt=0, le=120)
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        if v not in VALID_API_VERSIONS:
            raise ValueError(
                f"api_version must be one of {sorted(VALID_API_VERSIONS)}, got {v}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v

    @field_validator("base_url", "data_url", "stream_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        return v.rstrip("/") if v else v

    @property
    def trading_url(self) -> str:
        """Versioned REST base URL, e.g. https://paper-api.alpaca.markets/v2."""
        host = self.base_url or (PAPER_API_URL if self.paper else LIVE_API_URL)
        return f"{host}/{self.api_version}"

    @property
    def streaming_url(self) -> str:
        if self.stream_url:
            return self.stream_url
        return PAPER_STREAM_URL if self.paper else LIVE_STREAM_URL
