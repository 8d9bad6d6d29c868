"""Application configuration management."""

from pydantic import AnyUrl, ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: AnyUrl

    debug: bool = Field(
        default=False,
        description="Include stack traces in error responses",
    )
    cors_origins: list[str] = ["*"]

    # Listing
    default_page_size: int = Field(default=10, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1, le=500)

    # Board client
    api_base_url: str = "http://localhost:8000"
    status_update_timeout: float = Field(default=10.0, gt=0, le=120)

    # Reminder sweep
    reminder_sweep_enabled: bool = False
    reminder_sweep_minutes: int = Field(default=15, ge=1, le=1440)

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
