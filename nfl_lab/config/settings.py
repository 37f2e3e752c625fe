import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Supabase Configuration
    supabase_url: Optional[str] = Field(
        None, description="URL for the Supabase project."
    )
    supabase_key: Optional[str] = Field(
        None, description="Anon key for the Supabase project."
    )
    teams_table: str = Field(
        "teams_2025_v2", description="Table holding the team records."
    )
    analytics_table: str = Field(
        "team_analytics", description="Table holding per-team analytic grades."
    )

    # Schedule Settings
    current_week: int = Field(
        14,
        ge=1,
        description="Week number of the next scheduled game (index 0 of remainingOpponents).",
    )

    # Sync Settings
    poll_interval_seconds: float = Field(
        5.0, gt=0, description="Seconds between two reads of the league tables."
    )
    watch: bool = Field(
        False, description="Keep polling and re-rendering instead of a single pass."
    )

    # Presentation
    view: str = Field("home", description="Initial view (home, teams, detail).")
    focus_team: Optional[str] = Field(
        None, description="Team id opened in the detail view."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
