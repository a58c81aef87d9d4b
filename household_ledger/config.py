"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
import re
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()

_TRUTHY = re.compile(r"^(true|1)$", re.IGNORECASE)


def env_flag(name: str, default: str) -> bool:
    """Read a boolean flag. Only "true" or "1" (any case) count as on."""
    return bool(_TRUTHY.match(os.getenv(name, default).strip()))


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Application
        self.APP_NAME: str = "Household Ledger"
        self.APP_VERSION: str = "0.1.0"
        self.DEBUG: bool = env_flag("DEBUG", "false")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "3001"))

        # Database
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL",
            "postgresql://localhost:5432/household_ledger"
        )

        # Ledger write gate. Operators flip this off to freeze the
        # ledger tables without taking the API down.
        self.LEDGER_WRITE_ENABLED: bool = env_flag(
            "LEDGER_WRITE_ENABLED", "true"
        )

        # Environment
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. Call
    get_settings.cache_clear() after changing the environment.
    """
    return Settings()
