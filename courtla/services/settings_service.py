"""
Settings service for runtime configuration.

Values come from environment variables, optionally loaded from a ``.env``
file. Everything is read through functions so tests can change the
environment before building an app.
"""

import os
import logging
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def get_int_env(key: str, default: int) -> int:
    """
    Parse an integer environment variable, falling back to ``default``
    (with a warning) when the value is not a valid integer.
    """
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key}: {value!r}, using {default}")
        return default


def get_environment() -> str:
    """Deployment environment: ``development``, ``test`` or ``production``."""
    return os.getenv("ENV", "development").lower()


def is_production() -> bool:
    return get_environment() == "production"


def is_test_env() -> bool:
    return get_environment() == "test"


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    return get_int_env("PORT", 3000)


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_prefix() -> str:
    """API path prefix without a trailing slash (default ``/api``)."""
    prefix = os.getenv("API_PREFIX", "/api").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix


def get_allowed_origins() -> List[str]:
    """CORS origins from the comma-separated ``CORS_ORIGIN`` variable."""
    raw = os.getenv("CORS_ORIGIN", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_rate_limit() -> str:
    """
    Default rate limit as a slowapi limit string, built from
    ``RATE_LIMIT_MAX_REQUESTS`` per ``RATE_LIMIT_WINDOW_MS``.
    """
    max_requests = max(get_int_env("RATE_LIMIT_MAX_REQUESTS", 100), 1)
    window_ms = get_int_env("RATE_LIMIT_WINDOW_MS", 15 * 60 * 1000)
    window_seconds = max(window_ms // 1000, 1)
    return f"{max_requests}/{window_seconds} seconds"
