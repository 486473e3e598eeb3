from __future__ import annotations

import pytest

from weather.config import WidgetConfig
from weather.engines.types import Location


@pytest.fixture
def widget_config() -> WidgetConfig:
    return WidgetConfig(
        host="127.0.0.1",
        port=3000,
        api_key="test-key",
        base_url="https://api.openweathermap.org/data/2.5/weather",
        location=Location(lat=47.61, lon=-122.33),
        timeout_seconds=10.0,
        stylesheet_url="./index.css",
        exit_on_fetch_failure=True,
        keepalive_timeout_seconds=5.0,
    )
