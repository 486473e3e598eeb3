from __future__ import annotations

# ruff: noqa: S101
import asyncio
import json
import logging

import httpx
import pytest

from weather.engines.openweathermap import OpenWeatherMapProvider
from weather.engines.types import Location
from weather.errors import (
    InvalidCredentialError,
    MalformedPayloadError,
    TransportError,
    UpstreamRejectedError,
)

BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
SEATTLE = Location(lat=47.61, lon=-122.33)


def _provider(handler: httpx.MockTransport) -> OpenWeatherMapProvider:
    return OpenWeatherMapProvider(
        api_key="test-key", base_url=BASE_URL, transport=handler
    )


def _respond(status_code: int, content: bytes) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content)

    return httpx.MockTransport(handler)


def test_current_sends_location_and_credential() -> None:
    captured: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json={"weather": [{"icon": "01d"}]})

    payload = asyncio.run(
        _provider(httpx.MockTransport(handler)).current(SEATTLE)
    )

    assert payload == {"weather": [{"icon": "01d"}]}
    request = captured["request"]
    assert request.method == "GET"
    assert request.url.path == "/data/2.5/weather"
    assert request.url.params["lat"] == "47.61"
    assert request.url.params["lon"] == "-122.33"
    assert request.url.params["appid"] == "test-key"


def test_current_returns_payload_verbatim() -> None:
    body = {
        "weather": [{"id": 804, "main": "Clouds", "icon": "04n"}],
        "main": {"temp": 281.2},
        "name": "Seattle",
    }
    payload = asyncio.run(
        _provider(_respond(200, json.dumps(body).encode())).current(SEATTLE)
    )
    assert payload == body


def test_unauthorized_maps_to_invalid_credential() -> None:
    with pytest.raises(InvalidCredentialError) as exc:
        asyncio.run(
            _provider(_respond(401, b'{"cod":401}')).current(SEATTLE)
        )

    assert exc.value.code == "invalid_credential"
    assert exc.value.status_code == 401
    assert exc.value.method == "GET"
    assert exc.value.path == "/data/2.5/weather"


@pytest.mark.parametrize("status_code", [400, 404, 429, 500, 503])
def test_other_statuses_map_to_upstream_rejected(status_code: int) -> None:
    with pytest.raises(UpstreamRejectedError) as exc:
        asyncio.run(
            _provider(_respond(status_code, b"nope")).current(SEATTLE)
        )

    assert exc.value.code == "upstream_rejected"
    assert exc.value.status_code == status_code
    assert exc.value.method == "GET"
    assert exc.value.host == "api.openweathermap.org"
    assert exc.value.path == "/data/2.5/weather"
    assert "test-key" not in str(exc.value)


def test_unparseable_body_maps_to_malformed_payload() -> None:
    with pytest.raises(MalformedPayloadError) as exc:
        asyncio.run(_provider(_respond(200, b"not json")).current(SEATTLE))

    assert exc.value.code == "malformed_payload"
    assert exc.value.raw_body == "not json"


def test_non_object_json_maps_to_malformed_payload() -> None:
    with pytest.raises(MalformedPayloadError) as exc:
        asyncio.run(_provider(_respond(200, b"[1, 2]")).current(SEATTLE))

    assert exc.value.raw_body == "[1, 2]"


def test_network_failure_maps_to_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc:
        asyncio.run(_provider(httpx.MockTransport(handler)).current(SEATTLE))

    assert exc.value.code == "transport_error"
    assert isinstance(exc.value.__cause__, httpx.ConnectError)
    assert "test-key" not in str(exc.value)


def test_timeout_maps_to_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TransportError):
        asyncio.run(_provider(httpx.MockTransport(handler)).current(SEATTLE))


def test_api_key_required() -> None:
    with pytest.raises(ValueError):
        OpenWeatherMapProvider(api_key="")


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_standard_json_constants_map_to_malformed_payload(
    constant: str,
) -> None:
    body = '{"weather":[{"icon":"01d"}],"main":{"temp":' + constant + "}}"

    with pytest.raises(MalformedPayloadError) as exc:
        asyncio.run(
            _provider(_respond(200, body.encode())).current(SEATTLE)
        )

    assert exc.value.raw_body == body


def test_malformed_payload_message_includes_body_excerpt() -> None:
    with pytest.raises(MalformedPayloadError) as exc:
        asyncio.run(_provider(_respond(200, b"not json")).current(SEATTLE))

    message = str(exc.value)
    assert "200 GET api.openweathermap.org/data/2.5/weather" in message
    assert "body='not json'" in message
    assert "test-key" not in message


def test_malformed_payload_message_truncates_long_bodies() -> None:
    error = MalformedPayloadError("x" * 1000)

    assert error.raw_body == "x" * 1000
    assert "x" * 200 + "..." in str(error)
    assert "x" * 201 not in str(error)


def test_request_logging_never_exposes_credential(
    caplog: pytest.LogCaptureFixture,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"weather": [{"icon": "01d"}]})

    provider = OpenWeatherMapProvider(
        api_key="SECRET-KEY",
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )
    asyncio.run(provider.current(SEATTLE))

    assert "SECRET-KEY" not in caplog.text
    for name in ("httpx", "httpcore"):
        assert not logging.getLogger(name).isEnabledFor(logging.INFO)
