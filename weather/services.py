from __future__ import annotations

import logging
import time

from .config import WidgetConfig
from .engines.base import WeatherProvider
from .engines.openweathermap import OpenWeatherMapProvider
from .engines.types import Location, WeatherPayload
from .metrics import (
    weather_provider_errors_total,
    weather_provider_latency_seconds,
    weather_provider_requests_total,
)
from .presenter import RenderedPage, render_page

logger = logging.getLogger(__name__)


def build_provider(config: WidgetConfig) -> WeatherProvider:
    return OpenWeatherMapProvider(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout_seconds,
    )


async def fetch_current_weather(
    provider: WeatherProvider, location: Location
) -> WeatherPayload:
    """Fetch current conditions once, recording metrics for the attempt."""

    start_time = time.perf_counter()
    weather_provider_requests_total.labels(provider=provider.name).inc()
    try:
        payload = await provider.current(location)
    except Exception as exc:
        weather_provider_errors_total.labels(
            provider=provider.name,
            error_type=exc.__class__.__name__,
        ).inc()
        logger.error(
            "weather.fetch.failed provider=%s err=%s",
            provider.name,
            exc,
        )
        raise
    finally:
        duration = time.perf_counter() - start_time
        weather_provider_latency_seconds.labels(
            provider=provider.name
        ).observe(duration)

    logger.info(
        "weather.fetch.ok provider=%s lat=%s lon=%s duration=%.3fs",
        provider.name,
        location.lat,
        location.lon,
        duration,
    )
    return payload


async def prepare_page(
    config: WidgetConfig, provider: WeatherProvider | None = None
) -> RenderedPage:
    """Fetch the weather and render the page the server will hand out.

    Raises a `weather.errors.WeatherError` subclass if either step fails;
    the caller must not start listening in that case.
    """

    provider_impl = provider or build_provider(config)
    payload = await fetch_current_weather(provider_impl, config.location)
    page = render_page(payload, stylesheet_url=config.stylesheet_url)
    logger.info("weather.page.rendered bytes=%s", page.content_length)
    return page
