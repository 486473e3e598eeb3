from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..errors import (
    InvalidCredentialError,
    MalformedPayloadError,
    TransportError,
    UpstreamRejectedError,
)
from .base import WeatherProvider
from .types import Location, ProviderName, WeatherPayload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


class OpenWeatherMapProvider(WeatherProvider):
    """OpenWeatherMap implementation.

    Uses the `/data/2.5/weather` current-conditions endpoint. One attempt per
    call; status codes are mapped onto the `weather.errors` taxonomy.
    """

    name: ProviderName = "openweathermap"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("OpenWeatherMap API key is required")
        self.api_key = api_key
        self.base_url = base_url or DEFAULT_BASE_URL
        self.timeout = timeout
        self.transport = transport

    async def current(self, loc: Location) -> WeatherPayload:
        params = {
            "lat": loc.lat,
            "lon": loc.lon,
            "appid": self.api_key,
        }
        response = await self._request(params)
        return self._parse(response)

    async def _request(self, params: dict[str, Any]) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                return await client.get(self.base_url, params=params)
        except httpx.RequestError as exc:
            # The full URL carries the credential; report the path only.
            path = httpx.URL(self.base_url).path
            raise TransportError(
                f"request failed GET {path} {exc.__class__.__name__}"
            ) from exc

    def _parse(self, response: httpx.Response) -> WeatherPayload:
        request = response.request
        method = request.method
        host = request.url.host
        path = request.url.path

        if response.status_code == 401:
            raise InvalidCredentialError(method=method, host=host, path=path)
        if response.status_code != 200:
            raise UpstreamRejectedError(
                response.status_code, method=method, host=host, path=path
            )

        raw_body = response.text
        try:
            data = json.loads(
                response.content, parse_constant=_reject_constant
            )
        except ValueError as exc:
            raise MalformedPayloadError(
                raw_body, method=method, host=host, path=path
            ) from exc
        if not isinstance(data, dict):
            raise MalformedPayloadError(
                raw_body, method=method, host=host, path=path
            )

        logger.debug(
            "openweathermap.response status=%s bytes=%s",
            response.status_code,
            len(response.content),
        )
        return data

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return (
            "OpenWeatherMapProvider("
            f"base_url={self.base_url}, timeout={self.timeout}"
            ")"
        )
