"""Application configuration via environment variables."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    DEBUG: bool = False
    LOG_LEVEL: Literal["debug", "info", "warning", "error", "critical"] = "info"
    CORS_ORIGINS: list[str] = ["*"]

    # Record rules
    AGE_MIN: int = 0
    AGE_MAX: int = 150

    # Request limits
    MAX_DOCUMENT_BYTES: int = 1_000_000

    # Tree validation
    TREE_MATCH_POLICY: Literal["by_tag", "positional"] = "by_tag"
    TREE_ALLOW_EXTRA: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("LOG_LEVEL", "TREE_MATCH_POLICY", mode="before")
    @classmethod
    def _lowercase(cls, value):
        return value.lower() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()
