"""Application settings.

Values come from environment variables prefixed ``BIRD_TRENDS_`` (or a local
``.env`` file), e.g. ``BIRD_TRENDS_REGION=US-NY`` or
``BIRD_TRENDS_START_YEAR=1995``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bird_trends.analysis.seasons import MIN_YEAR


class Settings(BaseSettings):
    """Runtime configuration for the CLI and flows."""

    model_config = SettingsConfigDict(
        env_prefix="BIRD_TRENDS_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "bird-trends"
    app_env: str = "development"
    debug: bool = False
    api_port: int = 8000

    base_url: str = "https://ebird.org"
    region: str = Field(default="US-NY-109", description="eBird region code (county or state)")
    start_year: int = Field(default=2000, ge=MIN_YEAR)
    end_year: int = Field(default=2020, ge=MIN_YEAR)
    smoothing: Literal["loess", "none"] = "loess"
    site_dir: Path = Path("site")

    @model_validator(mode="after")
    def _check_year_range(self) -> Settings:
        if self.start_year > self.end_year:
            msg = f"start_year ({self.start_year}) is after end_year ({self.end_year})"
            raise ValueError(msg)
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
