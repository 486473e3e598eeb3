from __future__ import annotations

import logging
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from .metrics import widget_page_requests_total, widget_request_faults_total

logger = logging.getLogger(__name__)


class RequestBoundaryMiddleware:
    """Logs each request and contains faults to the request that raised.

    Django turns the exception into a 500 for that request only; the
    server thread and the process keep running.
    """

    def __init__(
        self, get_response: Callable[[HttpRequest], HttpResponse]
    ) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        logger.info("%s :: New Request", request.get_full_path())
        widget_page_requests_total.inc()
        return self.get_response(request)

    def process_exception(
        self, request: HttpRequest, exception: Exception
    ) -> None:
        widget_request_faults_total.labels(
            error_type=exception.__class__.__name__
        ).inc()
        logger.error(
            "%s :: Request failed err=%s",
            request.get_full_path(),
            exception,
            exc_info=exception,
        )
        return None
