"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT_TEMPLATE = (
    "https://api.flickr.com/services/feeds/photos_public.gne"
    "?format=json&nojsoncallback=1&tags={tags}"
)


class FeedSettings(BaseModel):
    endpoint_template: str = Field(
        default=DEFAULT_ENDPOINT_TEMPLATE,
        description="Feed URL with a {tags} placeholder for the encoded query.",
    )
    request_timeout_seconds: float = Field(default=10, ge=1, le=60)
    max_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)
    user_agent: str = "feedsearch/0.1"

    @field_validator("endpoint_template")
    @classmethod
    def _require_placeholder(cls, value: str) -> str:
        if "{tags}" not in value:
            raise ValueError("endpoint_template must contain a {tags} placeholder")
        return value


class SearchSettings(BaseModel):
    debounce_seconds: float = Field(default=0.5, ge=0, le=10)
    order: Literal["newest_first", "oldest_first"] = "newest_first"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FEEDSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    feed: FeedSettings = Field(default_factory=FeedSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_ENDPOINT_TEMPLATE",
    "FeedSettings",
    "SearchSettings",
    "get_settings",
]
