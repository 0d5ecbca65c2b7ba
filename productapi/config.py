"""Environment-based settings for the product API.

Values come from environment variables (or a local ``.env`` file) and
fall back to the defaults below.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings that come from environment variables."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Shared secret expected in the x-api-key header
    api_key: str = Field(default="12345")

    log_level: str = Field(default="INFO")
    seed_sample_data: bool = Field(default=True)
    # list setting: the env value is a JSON array, e.g. CORS_ORIGINS='["http://localhost:5173"]'
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
