from __future__ import annotations

import asyncio
import logging
import threading
from argparse import ArgumentParser

from django.core.management.base import BaseCommand, CommandError

from weather.config import (
    WidgetConfigError,
    load_widget_config,
    parse_port,
)
from weather.errors import WeatherError
from weather.server import (
    build_server,
    install_signal_handlers,
    serve_until_stopped,
)
from weather.services import prepare_page

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = (
        "Fetch current weather once, render the widget page, then serve it "
        "until SIGINT/SIGTERM."
    )

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("--host", help="Override the HOST setting.")
        parser.add_argument(
            "--port", type=int, help="Override the PORT setting."
        )

    def handle(self, *args: object, **options: object) -> None:
        try:
            config = load_widget_config()
        except WidgetConfigError as exc:
            raise CommandError(f"{exc} ({exc.code})") from exc

        host = str(options.get("host") or config.host)
        port_option = options.get("port")
        try:
            port = (
                parse_port(port_option)
                if isinstance(port_option, int)
                else config.port
            )
        except WidgetConfigError as exc:
            raise CommandError(f"{exc} ({exc.code})") from exc

        stop = threading.Event()
        try:
            page = asyncio.run(prepare_page(config))
        except WeatherError as exc:
            logger.error(
                "weather.startup.failed code=%s err=%s", exc.code, exc
            )
            if config.exit_on_fetch_failure:
                raise CommandError(
                    f"Weather startup failed ({exc.code}): {exc}"
                ) from exc
            logger.error(
                "weather.startup.inert server will not listen; "
                "waiting for a termination signal"
            )
            install_signal_handlers(stop)
            stop.wait()
            return

        try:
            server = build_server(
                page,
                host,
                port,
                keepalive_timeout=config.keepalive_timeout_seconds,
            )
        except OSError as exc:
            logger.error(
                "weather.startup.bind_failed host=%s port=%s err=%s",
                host,
                port,
                exc,
            )
            raise CommandError(
                f"Could not listen on {host}:{port}: {exc}"
            ) from exc
        install_signal_handlers(stop)
        serve_until_stopped(server, stop)
