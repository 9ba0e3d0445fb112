"""Django settings for idleWarzone.

The project has no database and no web surface: Django provides configuration,
logging setup and the `manage.py` command runner around the pure `levels`
package. Configuration is driven by environment variables so local overrides
are not checked into the repository.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_str(name: str, *, default: str | None) -> str | None:
    """Read a string environment variable, treating blank values as unset.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set or blank.

    Returns:
        The trimmed value, or `default`.
    """

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

INSTALLED_APPS = [
    "core.apps.CoreConfig",
]

DATABASES: dict[str, dict[str, str]] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# Optional YAML file overlaying the built-in base AP / map lookup tables.
LEVEL_LOOKUPS_PATH = _env_str("WARZONE_LEVEL_LOOKUPS", default=None)

LOG_LEVEL = (_env_str("WARZONE_LOG_LEVEL", default="WARNING") or "WARNING").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "levels": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "core": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
