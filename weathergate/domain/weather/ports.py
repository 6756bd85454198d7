# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, Protocol

from .entities import ConditionsReport


class WeatherProvider(Protocol):
    """External weather source. Failures surface as ``ExternalProviderError``."""

    async def geocode(self, city: str) -> list[dict[str, Any]]: ...

    async def current_conditions(self, lat: float, lon: float) -> ConditionsReport: ...
