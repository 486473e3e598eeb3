from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

ProviderName = Literal["openweathermap"]

# Provider JSON is kept as-is; only weather[0].icon is ever read.
WeatherPayload: TypeAlias = dict[str, Any]


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float
