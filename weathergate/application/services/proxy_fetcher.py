# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import copy
from numbers import Real

from weathergate.domain.weather.entities import ConditionsReport, Location
from weathergate.domain.weather.exceptions import LocationNotFoundError
from weathergate.domain.weather.ports import WeatherProvider
from weathergate.shared.errors import ExternalProviderError
from weathergate.shared.logging import logger


def _is_coordinate(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class ProxyFetcher:
    """Two-step lookup against the weather provider: geocode, then conditions."""

    def __init__(self, provider: WeatherProvider) -> None:
        self._provider = provider

    async def resolve_location(self, city: str) -> Location:
        matches = await self._provider.geocode(city)
        if not matches:
            logger.info(f"weather.geocode: no match city={city!r}")
            raise LocationNotFoundError(context={"city": city})

        first = matches[0]
        lat, lon = first.get("lat"), first.get("lon")
        if not (_is_coordinate(lat) and _is_coordinate(lon)):
            raise ExternalProviderError(
                f"geocode match without coordinates: {first!r}", endpoint="geocode"
            )
        return Location(lat=float(lat), lon=float(lon))

    async def fetch_conditions(self, lat: float, lon: float) -> ConditionsReport:
        return await self._provider.current_conditions(lat, lon)

    @staticmethod
    def build_multi_day_view(report: ConditionsReport, days: int) -> list[ConditionsReport]:
        """Repeat the current conditions ``days`` times.

        The provider contract has no per-day forecast, so every day shows
        today's conditions.
        """
        if days < 0:
            raise ValueError("days must be non-negative")
        return [copy.deepcopy(report) for _ in range(days)]

    async def fetch_forecast(self, city: str, days: int) -> list[ConditionsReport]:
        location = await self.resolve_location(city)
        report = await self.fetch_conditions(location.lat, location.lon)
        logger.info(
            f"weather.fetch: ok city={city!r} lat={location.lat} lon={location.lon} days={days}"
        )
        return self.build_multi_day_view(report, days)
