"""
Configuration management using Pydantic Settings.

This module provides centralized configuration for review generation,
loading values from environment variables and .env files.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden by environment variables.
    See .env.example for documentation of each setting.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Language Model Configuration
    # -------------------------------------------------------------------------
    openai_api_key: str = Field(
        default="",
        description="API key for the chat completion model"
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Custom base URL for OpenAI-compatible APIs"
    )
    openai_model: str = Field(
        default="gpt-3.5-turbo",
        description="Model used to generate reviews"
    )
    openai_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for review generation"
    )
    openai_max_tokens: int = Field(
        default=2000,
        description="Maximum tokens in the generated review"
    )

    # -------------------------------------------------------------------------
    # Storage and Output Configuration
    # -------------------------------------------------------------------------
    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory holding the review store"
    )
    default_output_dir: Path = Field(
        default=Path("./output"),
        description="Default directory for exported files"
    )
    json_indent: int = Field(
        default=2,
        description="JSON indentation spaces"
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Log level"
    )

    @property
    def is_openai_configured(self) -> bool:
        """Check if the language model API is configured."""
        return bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings (cached singleton).

    Returns:
        Settings instance loaded from environment
    """
    return Settings()
