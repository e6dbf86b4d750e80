import logging
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings
    """

    # A missing key is reported per request, so it must not fail validation here.
    CONCENTRATE_API_KEY: Optional[str] = Field(
        default=None,
        description="API key for the Concentrate AI gateway"
    )
    CONCENTRATE_BASE_URL: str = Field(
        default="https://api.concentrate.ai/v1",
        description="Concentrate AI API endpoint"
    )

    # === LOGGING CONFIGURATION ===
    LOG_LEVEL: str = Field(default="INFO")

    # === MODEL CONFIGURATION ===
    DEFAULT_MODEL: str = Field(
        default="gemini-pro",
        description="Model slug routed through the gateway, e.g. 'gemini-pro', 'gpt-4o-mini'"
    )
    RECOMMENDATION_COUNT: int = Field(default=5, ge=1, le=20)
    MAX_OUTPUT_TOKENS: int = Field(default=2000, ge=100, le=8000)
    TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    JSON_RESPONSE_MODE: bool = Field(
        default=False,
        description="Ask the gateway for a json_object text format instead of free-form text"
    )

    # === API CONFIGURATION ===
    API_TITLE: str = Field(default="FLIX.AI API")
    API_VERSION: str = Field(default="1.0.0")
    API_DESCRIPTION: str = Field(
        default="Movie recommendations by genre and language, generated by an LLM"
    )

    # === RETRY & TIMEOUT CONFIGURATION ===
    HTTP_TIMEOUT: int = Field(default=60, ge=5, le=300)
    RECOMMENDATION_ATTEMPTS: int = Field(default=3, ge=1, le=10)
    RETRY_BACKOFF_FACTOR: float = Field(default=1.0, ge=0.1)
    RETRY_WAIT_MIN: float = Field(default=2.0, ge=0.0, description="Shortest wait between attempts, seconds")
    RETRY_WAIT_MAX: float = Field(default=10.0, ge=0.0, description="Longest wait between attempts, seconds")

    # === SECURITY ===
    ALLOWED_ORIGINS: list[str] | str = Field(
        default=["http://localhost:8501", "http://frontend:8501"],
        description="CORS allowed origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=True,
        env_delimiter=",")

    @field_validator("CONCENTRATE_API_KEY", mode="after")
    @classmethod
    def normalize_api_key(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only key as not configured"""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure valid log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def normalize_allowed_origins(cls, v):
        """Allow comma-separated env var values for CORS origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode="after")
    def validate_retry_wait_bounds(self) -> "Settings":
        """Backoff bounds must form a valid range"""
        if self.RETRY_WAIT_MIN > self.RETRY_WAIT_MAX:
            raise ValueError("RETRY_WAIT_MIN must not exceed RETRY_WAIT_MAX")
        return self

    @property
    def has_api_key(self) -> bool:
        return self.CONCENTRATE_API_KEY is not None


def get_settings() -> Settings:
    """Factory function to load and validate settings"""
    try:
        settings = Settings()
        logger.info("✓ Configuration loaded and validated successfully")
        logger.debug(f"Model: {settings.DEFAULT_MODEL}")
        logger.debug(f"Log Level: {settings.LOG_LEVEL}")
        if not settings.has_api_key:
            logger.warning("CONCENTRATE_API_KEY is not set; recommendation requests will fail")
        return settings
    except Exception as e:
        logger.critical(f"FATAL: Configuration validation failed: {e}")
        raise SystemExit(f"Configuration Error: {e}")


settings = get_settings()
