# app/core/config.py

import json
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment (docker compose passes the
    # root .env through).
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    DATABASE_URL_LOCAL: str
    DATABASE_URL_PROD: str = ""

    # Secrets
    JWT_SECRET: str
    # The hosted auth service stamps tokens with aud="authenticated".
    # Leave unset to skip the audience check.
    JWT_AUDIENCE: Optional[str] = None
    INTERNAL_API_KEY: str

    # Comma-separated string or JSON array
    CORS_ORIGINS: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    RATE_LIMIT_ENABLED: bool = True
    REGISTRATION_RATE_LIMIT: str = "10/minute"

    # Join link opens this many minutes before the start
    JOIN_WINDOW_LEAD_MINUTES: int = 60
    COUNTDOWN_INTERVAL_SECONDS: float = 1.0

    PLACEHOLDER_IMAGE_URL: str = "/placeholder-masterclass.jpg"
    AUTH_PAGE_PATH: str = "/auth"

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated string or JSON array"""
        if not self.CORS_ORIGINS:
            return ["http://localhost:3000"]
        v = self.CORS_ORIGINS.strip()
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in v.split(",") if origin.strip()]


# Create a single instance of the settings
settings = Settings()
