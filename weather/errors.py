"""Failure taxonomy for fetching and rendering the weather widget.

Every error carries a stable `code` so startup diagnostics and metrics can
group failures without parsing messages.
"""

from __future__ import annotations


class WeatherError(Exception):
    """Base class for widget startup failures."""

    code = "weather_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidCredentialError(WeatherError):
    """The provider rejected the API credential (HTTP 401)."""

    code = "invalid_credential"

    def __init__(
        self,
        message: str = "invalid key",
        *,
        method: str = "",
        host: str = "",
        path: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = 401
        self.method = method
        self.host = host
        self.path = path


class UpstreamRejectedError(WeatherError):
    """The provider answered with a non-200, non-401 status."""

    code = "upstream_rejected"

    def __init__(
        self,
        status_code: int,
        *,
        method: str,
        host: str = "",
        path: str = "",
    ) -> None:
        super().__init__(f"bad request {status_code} {method} {host}{path}")
        self.status_code = status_code
        self.method = method
        self.host = host
        self.path = path


class MalformedPayloadError(WeatherError):
    """The provider answered 200 but the body is not a JSON object."""

    code = "malformed_payload"
    body_excerpt_chars = 200

    def __init__(
        self,
        raw_body: str,
        *,
        method: str = "",
        host: str = "",
        path: str = "",
        status_code: int = 200,
    ) -> None:
        excerpt = raw_body[: self.body_excerpt_chars]
        if len(raw_body) > self.body_excerpt_chars:
            excerpt += "..."
        super().__init__(
            f"invalid response {status_code} {method} {host}{path} "
            f"body={excerpt!r}"
        )
        self.status_code = status_code
        self.host = host
        self.raw_body = raw_body
        self.method = method
        self.path = path


class TransportError(WeatherError):
    """The outbound request could not complete (DNS, TLS, reset, timeout)."""

    code = "transport_error"


class RenderError(WeatherError):
    """The payload lacks a field the widget page needs."""

    code = "render_error"

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field
