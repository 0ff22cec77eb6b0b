"""Configuration for the OpenAPI Explorer."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EXPLORER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = Field(default="openapi-explorer")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")

    request_timeout_seconds: float = Field(default=30)
    verify_ssl: bool = Field(default=True)
    spec_fetch_timeout_seconds: float = Field(default=30)
    token_timeout_seconds: float = Field(default=20)
    default_token_path: str = Field(default="/oauth/token")

    cors_allow_origins: str = Field(default="*")

    def allowed_origins(self) -> List[str]:
        return [item.strip() for item in self.cors_allow_origins.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
