"""Django settings for the weather widget service.

Every value is read from the environment so the same build runs locally
and in a container. `weather.config.load_widget_config` validates the
widget-specific values before the server starts.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-not-for-prod")
DEBUG = _env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "weather",
]

MIDDLEWARE = [
    "weather.middleware.RequestBoundaryMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# No models; Django falls back to its dummy backend.
DATABASES: dict[str, dict[str, str]] = {}

USE_TZ = True
TIME_ZONE = "UTC"
DEFAULT_CHARSET = "utf-8"

# ---- Widget ----
HOST = os.environ.get("HOST", "127.0.0.1")
PORT = os.environ.get("PORT", "3000")

OPENWEATHER_API_KEY = os.environ.get("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.environ.get(
    "OPENWEATHER_BASE_URL",
    "https://api.openweathermap.org/data/2.5/weather",
)
OPENWEATHER_LAT = os.environ.get("OPENWEATHER_LAT", "47.61")
OPENWEATHER_LON = os.environ.get("OPENWEATHER_LON", "-122.33")
OPENWEATHER_TIMEOUT_S = os.environ.get("OPENWEATHER_TIMEOUT_S", "10")

WIDGET_STYLESHEET_URL = os.environ.get("WIDGET_STYLESHEET_URL", "./index.css")
WIDGET_EXIT_ON_FETCH_FAILURE = _env_bool("WIDGET_EXIT_ON_FETCH_FAILURE", True)
WIDGET_KEEPALIVE_TIMEOUT_S = os.environ.get("WIDGET_KEEPALIVE_TIMEOUT_S", "5")

# ---- Logging ----
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "below_error": {
            "()": "django.utils.log.CallbackFilter",
            "callback": lambda record: record.levelno < 40,
        },
    },
    "formatters": {
        "line": {
            "format": "[%(asctime)s|%(levelname)s] %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "filters": ["below_error"],
            "formatter": "line",
        },
        "stderr": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": "ERROR",
            "formatter": "line",
        },
        "null": {"class": "logging.NullHandler"},
    },
    "root": {"handlers": ["stdout", "stderr"], "level": LOG_LEVEL},
    "loggers": {
        "django.server": {
            "handlers": ["stdout", "stderr"],
            "level": "INFO",
            "propagate": False,
        },
        # weather.middleware already logs request faults with a traceback.
        "django.request": {
            "handlers": ["null"],
            "level": "ERROR",
            "propagate": False,
        },
        # Request lines carry the full URL, appid included.
        "httpx": {"level": "WARNING"},
        "httpcore": {"level": "WARNING"},
    },
}
