"""
Application configuration with environment variable support.
"""
from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    PORT: int = 3001
    DEFAULT_ARTICLE_LIMIT: int = 10

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 15.0
    CONTENT_FETCH_TIMEOUT_SECONDS: float = 10.0
    REQUEST_DELAY_SECONDS: float = 0.1
    ENRICH_CONCURRENCY: int = 4

    # CORS Configuration
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


settings = Settings()

# HTTP Client Configuration
SOURCE_USER_AGENT = "NewsFetcher/1.0"
CONTENT_USER_AGENT = "Mozilla/5.0 (compatible; NewsFetcher/1.0)"
SOURCE_HEADERS = {"User-Agent": SOURCE_USER_AGENT}

# Content enrichment
MIN_CONTENT_LENGTH: int = 100
MAX_CONTENT_WORDS: int = 300
