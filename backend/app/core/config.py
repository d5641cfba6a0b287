"""
Application Configuration

Centralized configuration management using Pydantic settings.
Handles environment variables and application settings.
"""

from typing import List, Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Xpat Jobs"
    VERSION: str = "1.0.0"
    DEBUG: bool = Field(False)
    ENVIRONMENT: str = Field("development")
    HOST: str = Field("0.0.0.0")
    PORT: int = Field(8000)
    LOG_LEVEL: str = Field("INFO")
    TESTING: bool = Field(False)

    # Database
    DATABASE_URL: str = Field("sqlite+aiosqlite:///./xpat_jobs.db")
    DATABASE_POOL_SIZE: int = Field(5)
    DATABASE_MAX_OVERFLOW: int = Field(10)

    # Redis (optional, wizard sessions fall back to process memory)
    REDIS_URL: Optional[str] = Field(None)
    WIZARD_SESSION_TTL_SECONDS: int = Field(3600)

    # Job board
    JOB_LISTING_TTL_DAYS: int = Field(7)
    EXPIRING_SOON_DAYS: int = Field(2)
    ANONYMOUS_NAME: str = Field("Anonymous")

    # Profile wizard
    WIZARD_TYPING_DELAY_SECONDS: float = Field(1.0)
    SKILLS_MIN_LENGTH: int = Field(10)

    # CORS
    CORS_ORIGINS: str = Field("http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000")
    CORS_CREDENTIALS: bool = Field(True)
    CORS_METHODS: str = Field("*")
    CORS_HEADERS: str = Field("*")

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def get_cors_methods_list(self) -> List[str]:
        """Get CORS methods as a list."""
        if self.CORS_METHODS == "*":
            return ["*"]
        return [method.strip() for method in self.CORS_METHODS.split(",")]

    def get_cors_headers_list(self) -> List[str]:
        """Get CORS headers as a list."""
        if self.CORS_HEADERS == "*":
            return ["*"]
        return [header.strip() for header in self.CORS_HEADERS.split(",")]


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
