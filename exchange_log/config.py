"""Application configuration."""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="EXCHANGE_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Exchange Log"
    app_version: str = "1.0.0"
    app_env: Literal["development", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Security
    api_key: Optional[str] = None
    allowed_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # HTTP exchange logging
    http_log_api_prefix: str = "/api/v1/"
    http_log_auth_prefix: str = "/api/v1/auth"
    http_log_logger_name: str = "exchange_log.middleware.logging"
    http_log_max_body_size: Optional[int] = Field(
        None, ge=0, description="Max body bytes rendered per log record; unbounded when unset"
    )

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

