"""
Portfolio API Configuration
"""

from enum import Enum
from functools import lru_cache
from typing import List

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProviderName(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


class ShareSettings(BaseModel):
    """Share link storage"""

    ttl_days: int = 30
    id_length: int = 8
    id_max_attempts: int = 5
    key_prefix: str = "share:"

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_days * 24 * 60 * 60


class Settings(BaseSettings):
    """API settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # ─────────────────────────────────────────────────
    # Basics
    # ─────────────────────────────────────────────────
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # "text" (colored console) or "json"
    PORT: int = 5000
    CORS_ORIGINS: List[str] = ["*"]

    # ─────────────────────────────────────────────────
    # Extraction provider
    # ─────────────────────────────────────────────────
    LLM_PROVIDER: LLMProviderName = LLMProviderName.GEMINI
    LLM_TEMPERATURE: float = 0.1

    # Google Gemini
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-pro-latest"

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"

    # ─────────────────────────────────────────────────
    # Redis (share links)
    # ─────────────────────────────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"
    share: ShareSettings = ShareSettings()

    # ─────────────────────────────────────────────────
    # Upload limits
    # ─────────────────────────────────────────────────
    MAX_FILE_SIZE_MB: int = 10

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()
