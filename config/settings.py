"""Configuration Management with Pydantic Settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Settings.

    Lädt Konfiguration aus Environment Variables und ``.env``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI / LLM (chat completions endpoint, optionally behind a proxy)
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None

    # Prompt generation
    prompt_temperature: float = Field(0.7, ge=0, le=2)
    prompt_request_timeout: float = Field(60.0, gt=0)
    prompt_max_attempts: int = Field(2, ge=1)
    prompt_retry_delay: float = Field(1.0, ge=0)

    # Application
    environment: str = "development"
    log_level: str = "INFO"


def get_settings() -> Settings:
    """
    Get application settings.

    Returns:
        Settings instance
    """
    return Settings()
