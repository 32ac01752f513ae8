"""
Centralized configuration module for application-wide settings.

Settings come from environment variables (optionally loaded from a ``.env``
file by ``load_environment``). Timezone handling lives here so that "today"
means the same thing for every dashboard query.
"""

import logging
import os
from datetime import date, datetime
from typing import Any, Dict
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TRUTHY = ("true", "1", "yes")

STORAGE_MEMORY = "memory"
STORAGE_SQL = "sql"


def load_environment() -> None:
    """Load variables from ``.env`` unless DATABASE_URL is already defined."""
    if not os.getenv("DATABASE_URL"):
        load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower().strip() in TRUTHY


# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'Asia/Almaty', 'UTC')
            Default: 'UTC'
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


APP_TZ = get_app_timezone()


def now() -> datetime:
    """Current timezone-aware datetime in the application timezone."""
    return datetime.now(APP_TZ)


def today() -> date:
    """Current calendar date in the application timezone."""
    return now().date()


# ===========================
# Storage Configuration
# ===========================


def get_storage_backend() -> str:
    """
    Get the repository backend to wire into the services.

    Environment Variables:
        STORAGE_BACKEND: 'sql' (default) or 'memory'
    """
    backend = os.getenv("STORAGE_BACKEND", STORAGE_SQL).lower().strip()
    if backend not in (STORAGE_MEMORY, STORAGE_SQL):
        logger.warning(
            f"Unknown STORAGE_BACKEND '{backend}', falling back to '{STORAGE_SQL}'"
        )
        return STORAGE_SQL
    return backend


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///./clinic.db")


# ===========================
# Security Configuration
# ===========================


def get_bcrypt_rounds() -> int:
    """bcrypt cost factor. Tests lower it to keep hashing fast."""
    try:
        return int(os.getenv("BCRYPT_ROUNDS", "12"))
    except ValueError:
        return 12


def get_jwt_expiration_hours() -> int:
    try:
        return int(os.getenv("JWT_EXPIRATION_HOURS", "24"))
    except ValueError:
        return 24


# ===========================
# Flask application config
# ===========================


def load_app_config() -> Dict[str, Any]:
    """Build the Flask config mapping from the environment."""
    env = os.getenv("FLASK_ENV", "development")
    return {
        "ENV_NAME": env,
        "TESTING": _env_flag("TESTING", "false"),
        "STORAGE_BACKEND": get_storage_backend(),
        "DATABASE_URL": get_database_url(),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
        "LOG_JSON": _env_flag("LOG_JSON", "false"),
        "LOG_TO_FILE": _env_flag("LOG_TO_FILE", "true" if env == "production" else "false"),
        "SQL_ECHO": _env_flag("SQL_ECHO", "false"),
        "LOGIN_DISABLED": _env_flag("LOGIN_DISABLED", "false"),
        "RATELIMIT_ENABLED": _env_flag("RATE_LIMIT_ENABLED", "true"),
        "SEED_DEMO_DATA": _env_flag("SEED_DEMO_DATA", "false"),
        "JSON_SORT_KEYS": False,
    }


def log_timezone_config():
    """Log the active timezone configuration at startup."""
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )
