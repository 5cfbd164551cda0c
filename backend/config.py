"""Application configuration using pydantic-settings."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # AI provider (OpenAI-compatible chat completions API)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = ""
    OPENAI_TIMEOUT_SECONDS: float = 60.0
    OPENAI_MAX_RETRIES: int = 2
    CHAT_MODEL: str = "gpt-4"
    VISION_MODEL: str = "gpt-4o"

    # Storage
    STORAGE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./perception.db"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Normalize STORAGE_BACKEND to one of the supported backends."""
        valid = {"memory", "sql"}
        if v.lower() not in valid:
            raise ValueError(f"STORAGE_BACKEND must be one of {valid}, got {v!r}")
        return v.lower()

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize LOG_LEVEL to an uppercase Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}, got {v!r}")
        return v.upper()

    # App settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"


settings = Settings()
