# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from weathergate.application.services.proxy_fetcher import ProxyFetcher
from weathergate.domain.weather.entities import ConditionsReport


class GetForecastUseCase:
    def __init__(self, *, fetcher: ProxyFetcher, days: int) -> None:
        self._fetcher = fetcher
        self._days = days

    async def execute(self, city: str) -> list[ConditionsReport]:
        return await self._fetcher.fetch_forecast(city, self._days)
