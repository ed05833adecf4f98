"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UpstreamSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="https://www.reddit.com",
        description="Root of the upstream content API; request paths are appended to it.",
    )
    user_agent: str = Field(default="subsearch/0.1", min_length=1)
    request_timeout_seconds: float = Field(default=10.0, gt=0, le=120)
    connect_timeout_seconds: float = Field(default=5.0, gt=0, le=60)
    max_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)

    @property
    def root(self) -> str:
        return str(self.base_url).rstrip("/")


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SUBSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    sfw_only: bool = Field(
        default=False,
        description="Never request NSFW results, whatever the caller's preference.",
    )

    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = ["SearchSettings", "UpstreamSettings", "get_settings"]
