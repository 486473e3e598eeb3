from __future__ import annotations

from abc import ABC, abstractmethod

from .types import Location, ProviderName, WeatherPayload


class WeatherProvider(ABC):
    """Abstract base for weather providers."""

    name: ProviderName

    @abstractmethod
    async def current(self, loc: Location) -> WeatherPayload:
        """Return the provider's current-conditions payload for a location."""
