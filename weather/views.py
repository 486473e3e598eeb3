"""Widget page endpoint.

Every method and path is answered with the page rendered at startup. The
server places that page in the WSGI environ under `PAGE_ENVIRON_KEY`.
"""

from __future__ import annotations

from typing import Final

from django.core.exceptions import ImproperlyConfigured
from django.http import HttpRequest, HttpResponse

from .presenter import RenderedPage

PAGE_ENVIRON_KEY: Final[str] = "weather.rendered_page"


def widget_page(
    request: HttpRequest, *args: object, **kwargs: object
) -> HttpResponse:
    page = request.META.get(PAGE_ENVIRON_KEY)
    if not isinstance(page, RenderedPage):
        raise ImproperlyConfigured(
            "No rendered page in the request environ; start the service "
            "with `manage.py weather_serve`."
        )
    response = HttpResponse(page.body, content_type=page.content_type)
    response.headers["Content-Length"] = str(page.content_length)
    return response
