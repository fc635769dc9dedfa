# api/utils/config.py
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file (existing variables win)
load_dotenv()

logger = logging.getLogger("curtain_wall.api")


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{name}={value!r} is not an integer; using {default}")
        return default


class Config:
    """Application configuration loaded from environment variables"""

    # Application settings
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
    DEBUG = os.environ.get("DEBUG", "false").lower() == "true"

    # Directory for the designer and pricing log file; unset logs to the console only
    LOG_DIR = os.environ.get("LOG_DIR") or None

    # Design sessions are kept in process memory
    MAX_SESSIONS = _int_env("MAX_SESSIONS", 100)

    # Comma separated list of allowed origins
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == "production"

    @classmethod
    def validate(cls):
        """Validate critical configuration values"""
        if cls.MAX_SESSIONS < 1:
            logger.error(f"MAX_SESSIONS must be at least 1, got {cls.MAX_SESSIONS}")

        if cls.is_production() and "*" in cls.CORS_ORIGINS:
            logger.warning("CORS allows all origins - restrict CORS_ORIGINS in production!")

        if cls.is_production() and cls.DEBUG:
            logger.warning("DEBUG is enabled in production")
