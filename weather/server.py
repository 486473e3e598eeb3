"""Threaded HTTP listener for the widget page.

Built on Django's own WSGI server classes. Request threads are non-daemon
and joined on close, so a shutdown lets in-flight responses finish.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading
from collections.abc import Callable
from types import FrameType
from typing import Any

from django.core.servers.basehttp import (
    ThreadedWSGIServer,
    WSGIRequestHandler,
    get_internal_wsgi_application,
)

from .presenter import RenderedPage
from .views import PAGE_ENVIRON_KEY

logger = logging.getLogger(__name__)

WSGIApp = Callable[..., Any]


class WidgetRequestHandler(WSGIRequestHandler):
    def setup(self) -> None:
        # Bounds how long an idle keep-alive connection can hold a thread.
        server: WidgetServer = self.server  # type: ignore[assignment]
        self.timeout = server.keepalive_timeout
        super().setup()


class WidgetServer(ThreadedWSGIServer):
    daemon_threads = False
    block_on_close = True

    def __init__(
        self,
        server_address: tuple[str, int],
        page: RenderedPage,
        *,
        keepalive_timeout: float = 5.0,
        **kwargs: Any,
    ) -> None:
        # server_bind() runs inside super().__init__ and reads both.
        self.page = page
        self.keepalive_timeout = keepalive_timeout
        super().__init__(server_address, WidgetRequestHandler, **kwargs)

    def setup_environ(self) -> None:
        super().setup_environ()
        self.base_environ[PAGE_ENVIRON_KEY] = self.page

    def handle_error(
        self, request: Any, client_address: tuple[str, int]
    ) -> None:
        if isinstance(sys.exc_info()[1], TimeoutError):
            logger.debug(
                "widget.server.idle_timeout client=%s", client_address
            )
            return
        super().handle_error(request, client_address)


def build_server(
    page: RenderedPage,
    host: str,
    port: int,
    *,
    keepalive_timeout: float = 5.0,
    app: WSGIApp | None = None,
) -> WidgetServer:
    """Bind the listening socket and attach the WSGI application."""

    server = WidgetServer(
        (host, port),
        page,
        keepalive_timeout=keepalive_timeout,
        ipv6=":" in host,
    )
    server.set_app(app or get_internal_wsgi_application())
    return server


def install_signal_handlers(stop: threading.Event) -> None:
    """Route SIGINT and SIGTERM to `stop`. Main thread only."""

    def _request_stop(signum: int, frame: FrameType | None) -> None:
        logger.info(
            "widget.server.signal signal=%s", signal.Signals(signum).name
        )
        stop.set()

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)


def serve_until_stopped(server: WidgetServer, stop: threading.Event) -> None:
    """Serve until `stop` is set, then drain in-flight requests and close."""

    thread = threading.Thread(
        target=server.serve_forever, name="widget-server", daemon=True
    )
    thread.start()
    host, port = server.server_address[:2]
    logger.info("Server is listening on %s:%s", host, port)
    try:
        stop.wait()
    finally:
        logger.info("widget.server.stopping")
        server.shutdown()
        # Closes the socket, then joins the request threads.
        server.server_close()
        thread.join()
        logger.info("widget.server.stopped")
