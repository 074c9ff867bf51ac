"""
Application configuration loaded from environment variables.

Uses Pydantic Settings to:
1. Read from .env file automatically
2. Validate values at startup
3. Provide type-safe access throughout the app

Usage:
    from report_service.config import settings
    print(settings.BRAND_NAME)

Note: empty shell environment variables would normally shadow values in
the .env file. The validator below fills those blanks from .env.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All application configuration in one place."""

    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=True,     # ENV_VAR must match exactly
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def prefer_dotenv_over_empty_env(cls, data):
        """If an env var is empty but .env has a value, use the .env value."""
        from dotenv import dotenv_values

        dotenv_vals = dotenv_values(".env")
        for key, dotenv_value in dotenv_vals.items():
            if dotenv_value and (key not in data or not data.get(key)):
                data[key] = dotenv_value
        return data

    # --- Reports ---
    BRAND_NAME: str = "TaskFlowPro"
    REPORT_AUTHOR: str = "TaskFlowPro Report Service"

    # --- Application ---
    APP_ENV: str = "development"
    DEBUG: bool = True
    CORS_ORIGINS: str = "http://localhost:5000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def footer_text(self) -> str:
        """Brand line printed at the bottom of every summary report."""
        return f"{self.BRAND_NAME} - Task Management System"


# Singleton instance — import this everywhere
settings = Settings()
