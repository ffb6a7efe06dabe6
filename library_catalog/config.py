"""
Configuration management for the library catalog service.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Configuration class for the application."""

    # Text generation endpoint (Ollama compatible /api/generate)
    AI_SERVICE_URL = os.getenv("AI_SERVICE_URL", "http://localhost:11434/api/generate")
    AI_MODEL = os.getenv("AI_MODEL", "llama3")
    # Seconds; None keeps the transport default
    AI_TIMEOUT_RAW = os.getenv("AI_TIMEOUT", "")

    # Application Configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT_RAW = os.getenv("PORT", "8000")

    @classmethod
    def ai_timeout(cls) -> Optional[float]:
        if not cls.AI_TIMEOUT_RAW.strip():
            return None
        return float(cls.AI_TIMEOUT_RAW)

    @classmethod
    def port(cls) -> int:
        return int(cls.PORT_RAW)

    @classmethod
    def validate(cls):
        """Validate that all required configuration is present."""
        missing = []

        if not cls.AI_SERVICE_URL.strip():
            missing.append("AI_SERVICE_URL")
        if not cls.AI_MODEL.strip():
            missing.append("AI_MODEL")

        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")

        try:
            cls.ai_timeout()
        except ValueError:
            raise ValueError(f"AI_TIMEOUT must be a number of seconds, got {cls.AI_TIMEOUT_RAW!r}")
        try:
            cls.port()
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {cls.PORT_RAW!r}")

        return True


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("library_catalog")
    if not logger.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        h.setFormatter(fmt)
        logger.addHandler(h)
    logger.setLevel(level or Config.LOG_LEVEL)
    return logger


# Validate configuration on import
Config.validate()
