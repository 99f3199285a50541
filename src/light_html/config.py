"""Configuration management for light-html."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from light_html.formatting.ir import TruncationMode


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Render defaults for text that specifies no size or color
    default_font_size: float = Field(
        default=14.0,
        gt=0,
        alias="LIGHT_HTML_FONT_SIZE",
    )
    default_color: str = Field(
        default="#000000",
        alias="LIGHT_HTML_COLOR",
    )

    # Placeholders are written as $NAME$ with the default marker
    placeholder_marker: str = Field(
        default="$",
        alias="LIGHT_HTML_PLACEHOLDER_MARKER",
    )

    # Length budget
    max_length: Optional[int] = Field(
        default=None,
        ge=0,
        alias="LIGHT_HTML_MAX_LENGTH",
    )
    truncation: TruncationMode = Field(
        default=TruncationMode.PER_RUN,
        alias="LIGHT_HTML_TRUNCATION",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        alias="LIGHT_HTML_LOG_LEVEL",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
