"""
Application configuration.

Settings are read from environment variables (or a local .env file) and
cached for the lifetime of the process.
"""

from typing import List, Union
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = "sqlite:///./retailpulse.db"
    log_sql_queries: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API
    app_name: str = "RetailPulse"
    app_version: str = "1.0.0"
    cors_origins: Union[List[str], str] = ["http://localhost:3000"]

    # Analytics
    metrics_cache_enabled: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


settings = get_settings()
