"""HTML rendering for the weather widget page.

The page is rendered once from the fetched payload and then served as-is,
so rendering must be a pure function of its inputs.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Final

from django.utils.html import format_html

from .engines.types import WeatherPayload
from .errors import RenderError

PAGE_TITLE: Final[str] = "Vanilla Weather Widget"
ICON_URL_TEMPLATE: Final[str] = "https://openweathermap.org/img/wn/{icon}.png"
CONTENT_TYPE: Final[str] = "text/html; charset=utf-8"

_MASTER_TEMPLATE: Final[str] = (
    "<!DOCTYPE html>\n"
    '<html lang="en">\n'
    "  <head>\n"
    "    <title>{}</title>\n"
    '    <meta name="viewport" content="width=device-width, '
    'initial-scale=1">\n'
    '    <meta charset="utf-8">\n'
    "{}"
    "  </head>\n"
    "  <body>\n"
    "{}"
    "  </body>\n"
    "</html>\n"
)
_STYLESHEET_TEMPLATE: Final[str] = '    <link rel="stylesheet" href="{}">\n'
_WIDGET_TEMPLATE: Final[str] = "    <p>{}</p>\n    <img src=\"{}\">\n"


@dataclass(frozen=True)
class RenderedPage:
    """Encoded widget page, ready to write to any number of responses."""

    body: bytes
    content_type: str = CONTENT_TYPE

    @property
    def content_length(self) -> int:
        return len(self.body)


def weather_icon(payload: WeatherPayload) -> str:
    """Return `weather[0].icon`, or raise RenderError if it is unusable."""

    conditions: Any = payload.get("weather")
    if not isinstance(conditions, list) or not conditions:
        raise RenderError(
            "payload has no weather conditions", field="weather[0]"
        )
    first = conditions[0]
    if not isinstance(first, dict):
        raise RenderError(
            "weather[0] is not an object", field="weather[0]"
        )
    icon = first.get("icon")
    if not isinstance(icon, str) or not icon.strip():
        raise RenderError(
            "weather[0].icon is missing or empty", field="weather[0].icon"
        )
    return icon.strip()


def icon_url(icon: str) -> str:
    return ICON_URL_TEMPLATE.format(icon=icon)


def render_widget(payload: WeatherPayload) -> str:
    icon = weather_icon(payload)
    serialized = json.dumps(
        payload, separators=(",", ":"), ensure_ascii=False
    )
    return format_html(_WIDGET_TEMPLATE, serialized, icon_url(icon))


def render_page(
    payload: WeatherPayload, *, stylesheet_url: str = ""
) -> RenderedPage:
    """Render the full widget document for `payload`.

    Raises RenderError when `weather[0].icon` is missing or malformed.
    """

    links = (
        format_html(_STYLESHEET_TEMPLATE, stylesheet_url)
        if stylesheet_url
        else ""
    )
    html = format_html(
        _MASTER_TEMPLATE, PAGE_TITLE, links, render_widget(payload)
    )
    return RenderedPage(body=html.encode("utf-8"))
