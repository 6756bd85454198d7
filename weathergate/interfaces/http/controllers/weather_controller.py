# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, after_this_request, request

from weathergate.application.use_cases.weather.check_access import CheckAccessUseCase
from weathergate.application.use_cases.weather.get_forecast import GetForecastUseCase
from weathergate.infrastructure.observability import record_access
from weathergate.interfaces.http.cookies import (
    COUNTER_COOKIE,
    extract_token,
    set_counter_cookie,
)
from weathergate.interfaces.http.dto.envelope import redirect_response, success_response
from weathergate.interfaces.http.dto.weather import WeatherQueryDTO
from weathergate.shared.config import AccessConfig, SecurityConfig
from weathergate.shared.errors.validation import parse_model
from weathergate.shared.logging import logger
from weathergate.utils.asyncio_utils import run_async


class WeatherController:
    def __init__(
        self,
        *,
        check_access: CheckAccessUseCase,
        get_forecast: GetForecastUseCase,
        access: AccessConfig,
        security: SecurityConfig,
    ) -> None:
        self._check_access = check_access
        self._get_forecast = get_forecast
        self._access = access
        self._security = security

    def weather(self) -> Response:
        decision, user = self._check_access.execute(
            extract_token(request), request.cookies.get(COUNTER_COOKIE)
        )
        record_access(decision.admit, user is not None)

        # Echoed on every outcome, error envelopes included.
        @after_this_request
        def _echo_counter(response: Response) -> Response:
            set_counter_cookie(response, decision.counter, self._security)
            return response

        if not decision.admit:
            return redirect_response(self._access.login_route)

        dto = parse_model(WeatherQueryDTO, {"city": request.args.get("city", "")})
        forecast = run_async(self._get_forecast.execute(dto.city))
        logger.info(
            f"weather.view: ok city={dto.city!r} user={user.username if user else '-'} "
            f"counter={decision.counter}"
        )
        return success_response(forecast)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("weather", __name__)
        bp.add_url_rule("/weather", view_func=self.weather, methods=["GET"])
        return bp
