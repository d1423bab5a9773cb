"""
Application Settings
===================

Rendering defaults and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    """Library settings with environment variable support."""

    # Application Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    # Storage Configuration
    output_dir: Path = Field(default=Path("."), description="Default output directory")
    temp_path: Optional[Path] = Field(
        default=None, description="Directory for temporary markup files (system default if unset)"
    )

    # Rendering Configuration
    default_width: int = Field(default=1400, description="Default image width in pixels")
    default_height: int = Field(default=800, description="Default image height in pixels")
    default_zoom: float = Field(default=2.0, description="Default zoom (device scale factor)")
    html_font_size: int = Field(default=12, description="HTML table font size in pixels")
    pdf_font_size: int = Field(default=9, description="LaTeX table font size in points")

    # Rasterizer Configuration
    rasterizer: str = Field(default="playwright", description="Rasterizer: playwright, chrome")
    chrome_binary: Optional[str] = Field(
        default=None, description="Explicit Chrome/Chromium binary for the chrome rasterizer"
    )
    rasterizer_delay: float = Field(
        default=0.2, description="Settle delay in seconds before the screenshot"
    )
    rasterizer_timeout: int = Field(default=60, description="Rasterizer timeout in seconds")
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("rasterizer")
    @classmethod
    def validate_rasterizer(cls, v: str) -> str:
        """Validate rasterizer name."""
        allowed = {"playwright", "chrome"}
        if v.lower() not in allowed:
            raise ValueError(f"Rasterizer must be one of: {allowed}")
        return v.lower()

    @field_validator("rasterizer_delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        """Validate settle delay."""
        if v < 0:
            raise ValueError("Rasterizer delay cannot be negative")
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="RESEARCH_TABLES_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
