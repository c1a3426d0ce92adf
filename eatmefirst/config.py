"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./eatmefirst.db")

    # Redis (Celery broker for the reminder job)
    redis_url: str = Field(default="redis://localhost:6379/0")

    # Expiry rules
    timezone: str = Field(default="UTC")
    expiring_soon_days: int = Field(default=3, ge=0)
    critical_days: int = Field(default=3)
    warning_days: int = Field(default=7)

    # Daily expiry reminder
    reminder_hour: int = Field(default=9, ge=0, le=23)
    reminder_minute: int = Field(default=0, ge=0, le=59)
    expo_push_token: str | None = Field(default=None)
    expo_push_url: str = Field(default="https://exp.host/--/api/v2/push/send")

    # External product and recipe APIs
    openfoodfacts_base_url: str = Field(default="https://world.openfoodfacts.org")
    mealdb_base_url: str = Field(default="https://www.themealdb.com/api/json/v1/1")
    http_timeout_seconds: float = Field(default=30.0)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate threshold ordering and production settings."""
        if self.critical_days > self.warning_days:
            raise ValueError("CRITICAL_DAYS must not exceed WARNING_DAYS")
        if self.is_production and self.database_url.startswith("sqlite"):
            raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
