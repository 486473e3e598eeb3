"""Widget configuration loader.

Reads the HOST/PORT/OPENWEATHER_* settings and validates them into a frozen
`WidgetConfig` before any network activity happens.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from django.conf import settings

from .engines.openweathermap import DEFAULT_BASE_URL
from .engines.types import Location


class WidgetConfigError(Exception):
    """Raised when widget configuration is missing or invalid."""

    def __init__(self, message: str, *, code: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class WidgetConfig:
    host: str
    port: int
    api_key: str
    base_url: str
    location: Location
    timeout_seconds: float
    stylesheet_url: str
    exit_on_fetch_failure: bool
    keepalive_timeout_seconds: float


def _setting_str(name: str, default: str = "") -> str:
    raw = getattr(settings, name, default)
    if raw is None:
        return default
    if not isinstance(raw, str | int | float):
        raise WidgetConfigError(f"{name} must be a string.", code="bad_value")
    return str(raw).strip()


def _setting_float(
    name: str,
    default: str,
    *,
    minimum: float | None = None,
    maximum: float | None = None,
) -> float:
    raw = _setting_str(name, default) or default
    try:
        value = float(raw)
    except ValueError as exc:
        raise WidgetConfigError(
            f"{name} must be a number, got {raw!r}.", code="bad_value"
        ) from exc
    if not math.isfinite(value):
        raise WidgetConfigError(
            f"{name} must be a finite number, got {raw!r}.",
            code="bad_value",
        )
    if minimum is not None and value < minimum:
        raise WidgetConfigError(
            f"{name} must be >= {minimum}, got {value}.", code="bad_value"
        )
    if maximum is not None and value > maximum:
        raise WidgetConfigError(
            f"{name} must be <= {maximum}, got {value}.", code="bad_value"
        )
    return value


def parse_port(raw: str | int) -> int:
    try:
        port = int(raw)
    except ValueError as exc:
        raise WidgetConfigError(
            f"PORT must be an integer, got {raw!r}.", code="bad_value"
        ) from exc
    if not 1 <= port <= 65535:
        raise WidgetConfigError(
            f"PORT must be between 1 and 65535, got {port}.",
            code="bad_value",
        )
    return port


def load_widget_config() -> WidgetConfig:
    """Return the validated widget configuration."""

    host = _setting_str("HOST", "127.0.0.1") or "127.0.0.1"
    port = parse_port(_setting_str("PORT", "3000") or "3000")

    api_key = _setting_str("OPENWEATHER_API_KEY")
    if not api_key:
        raise WidgetConfigError(
            "OPENWEATHER_API_KEY is required.", code="missing_config"
        )

    base_url = (
        _setting_str("OPENWEATHER_BASE_URL", DEFAULT_BASE_URL)
        or DEFAULT_BASE_URL
    )
    if not base_url.startswith(("https://", "http://")):
        raise WidgetConfigError(
            "OPENWEATHER_BASE_URL must be an http(s) URL.",
            code="bad_value",
        )

    location = Location(
        lat=_setting_float(
            "OPENWEATHER_LAT", "47.61", minimum=-90, maximum=90
        ),
        lon=_setting_float(
            "OPENWEATHER_LON", "-122.33", minimum=-180, maximum=180
        ),
    )

    return WidgetConfig(
        host=host,
        port=port,
        api_key=api_key,
        base_url=base_url,
        location=location,
        timeout_seconds=_setting_float(
            "OPENWEATHER_TIMEOUT_S", "10", minimum=0.1
        ),
        stylesheet_url=_setting_str("WIDGET_STYLESHEET_URL"),
        exit_on_fetch_failure=bool(
            getattr(settings, "WIDGET_EXIT_ON_FETCH_FAILURE", True)
        ),
        keepalive_timeout_seconds=_setting_float(
            "WIDGET_KEEPALIVE_TIMEOUT_S", "5", minimum=0.1
        ),
    )
