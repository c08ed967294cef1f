"""Configuration management using Pydantic."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scripted_browser.utils.constants import (
    BROWSER_TYPES,
    DEFAULT_TIMEOUT,
    NAVIGATION_TIMEOUT,
)


class BrowserSettings(BaseSettings):
    """Browser session configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BROWSER_",
        env_file=".env",
        extra="ignore",
    )

    browser_type: str = Field(
        default="chromium",
        description="Playwright browser engine: chromium, firefox or webkit",
    )
    headless: bool = Field(default=True, description="Run without a window")
    slow_mo: float = Field(
        default=0, ge=0, description="Delay every browser operation (ms)"
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Default step timeout (ms)"
    )
    navigation_timeout: int = Field(
        default=NAVIGATION_TIMEOUT, gt=0, description="Default navigation timeout (ms)"
    )
    viewport_width: int | None = Field(default=None, gt=0)
    viewport_height: int | None = Field(default=None, gt=0)
    launch_args: list[str] = Field(
        default_factory=list, description="Extra browser command-line switches"
    )

    @field_validator("browser_type")
    @classmethod
    def validate_browser_type(cls, value: str) -> str:
        """Only accept engines Playwright ships."""
        value = value.lower()
        if value not in BROWSER_TYPES:
            raise ValueError(
                f"browser_type must be one of {', '.join(BROWSER_TYPES)}, got {value!r}"
            )
        return value

    @model_validator(mode="after")
    def validate_viewport(self) -> BrowserSettings:
        """Viewport dimensions are given together or not at all."""
        if (self.viewport_width is None) != (self.viewport_height is None):
            raise ValueError("viewport_width and viewport_height must be set together")
        return self

    @property
    def viewport(self) -> dict[str, int] | None:
        """Viewport dict for Browser.new_context, or None for the default."""
        if self.viewport_width is None or self.viewport_height is None:
            return None
        return {"width": self.viewport_width, "height": self.viewport_height}

    def launch_options(self) -> dict:
        """Keyword arguments for BrowserType.launch."""
        options: dict = {"headless": self.headless}
        if self.slow_mo:
            options["slow_mo"] = self.slow_mo
        if self.launch_args:
            options["args"] = list(self.launch_args)
        return options

    def context_options(self) -> dict:
        """Keyword arguments for Browser.new_context."""
        viewport = self.viewport
        return {"viewport": viewport} if viewport else {}


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTED_BROWSER_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    output_dir: Path = Path("./data/output")
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance (singleton)."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings() -> Settings:
    """Load settings from environment (alias for get_settings)."""
    return get_settings()
