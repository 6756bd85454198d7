# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

import httpx

from weathergate.domain.weather.entities import ConditionsReport
from weathergate.domain.weather.ports import WeatherProvider
from weathergate.infrastructure.observability import record_provider_call
from weathergate.infrastructure.resilience import (
    CircuitBreaker,
    CircuitOpenError,
    resilient_call,
)
from weathergate.shared.config import ResilienceConfig, WeatherConfig
from weathergate.shared.errors import ExternalProviderError
from weathergate.shared.logging import logger


class OpenWeatherProvider(WeatherProvider):
    """OpenWeatherMap geocoding and current-weather endpoints."""

    def __init__(
        self,
        settings: WeatherConfig,
        policy: ResilienceConfig,
        *,
        breaker: CircuitBreaker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._policy = policy
        self._breaker = breaker or CircuitBreaker.from_config(policy)
        self._transport = transport

    async def geocode(self, city: str) -> list[dict[str, Any]]:
        payload = await self._get_json(
            "geocode", self._settings.geocoding_url, {"q": city}
        )
        if not isinstance(payload, list) or not all(isinstance(x, dict) for x in payload):
            raise ExternalProviderError(
                f"unexpected geocode payload type {type(payload).__name__}",
                endpoint="geocode",
            )
        return payload

    async def current_conditions(self, lat: float, lon: float) -> ConditionsReport:
        payload = await self._get_json(
            "conditions",
            self._settings.conditions_url,
            {
                "lat": lat,
                "lon": lon,
                "lang": self._settings.lang,
                "units": self._settings.units,
            },
        )
        if not isinstance(payload, dict):
            raise ExternalProviderError(
                f"unexpected conditions payload type {type(payload).__name__}",
                endpoint="conditions",
            )
        return payload

    async def _get_json(self, endpoint: str, url: str, params: dict[str, Any]) -> Any:
        query = {**params, "appid": self._settings.api_key}
        async with httpx.AsyncClient(
            timeout=self._settings.timeout, transport=self._transport
        ) as http:
            async def _fetch() -> httpx.Response:
                response = await http.get(url, params=query)
                if response.status_code >= 500:
                    response.raise_for_status()
                return response

            try:
                response = await resilient_call(
                    _fetch,
                    policy=self._policy,
                    breaker=self._breaker,
                    timeout=self._settings.timeout,
                )
            except CircuitOpenError as exc:
                record_provider_call(endpoint, "circuit_open")
                raise ExternalProviderError("circuit open", endpoint=endpoint) from exc
            except (httpx.HTTPError, TimeoutError) as exc:
                record_provider_call(endpoint, "transport_error")
                logger.warning(f"weather.{endpoint}: request failed {type(exc).__name__}")
                raise ExternalProviderError(
                    f"{type(exc).__name__}: {exc}", endpoint=endpoint
                ) from exc

        if not response.is_success:
            record_provider_call(endpoint, "bad_status")
            logger.warning(
                f"weather.{endpoint}: status={response.status_code} body={response.text[:200]}"
            )
            raise ExternalProviderError(
                f"provider answered {response.status_code}", endpoint=endpoint
            )
        try:
            payload = response.json()
        except ValueError as exc:
            record_provider_call(endpoint, "bad_body")
            raise ExternalProviderError("provider answered non-JSON body", endpoint=endpoint) from exc
        record_provider_call(endpoint, "ok")
        return payload


__all__ = ["OpenWeatherProvider"]
