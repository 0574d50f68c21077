"""Application settings definitions."""
from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AppSettings(BaseSettings):
    """Settings loaded from environment variables."""

    database_url: str = "sqlite:///./dharma_gates.db"
    geocoder_base_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "DharmaGates/1.0"
    geocoder_language: str = "en"
    geocoder_timeout_seconds: float = 10.0
    pinned_country: str = "United States"
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost",
            "http://localhost:3000",
            "http://127.0.0.1",
            "http://127.0.0.1:3000",
        ]
    )
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        """Ensure comma-separated origins are converted into a list."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Load settings using cached environment lookup."""

        return _get_settings()


@lru_cache(maxsize=1)
def _get_settings() -> AppSettings:
    """Internal cache for settings to avoid repeated parsing."""

    return AppSettings()
