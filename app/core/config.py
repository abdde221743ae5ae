"""Configuration management for the check-in scoring engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    CHECKIN_ENV: str = Field(default="dev", description="Environment: dev, test, staging, prod")
    LOG_LEVEL: str | None = Field(
        default=None, description="Explicit log level; derived from CHECKIN_ENV when unset"
    )

    # Scoring output
    SCORE_DECIMALS: int = Field(
        default=1, ge=0, le=6, description="Decimal places kept on reported scores"
    )

    # Band authoring
    DEFAULT_BAND_PRESET: str = Field(
        default="custom",
        description="Band configuration selected for a new editor: 'custom' or a preset name",
    )

    # Template limits
    MAX_TEMPLATE_QUESTIONS: int = Field(
        default=500, ge=1, description="Max questions accepted in a single template"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If an environment variable has an invalid value
    """
    return Settings()
