# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from weathergate.application.services.password_hashing import WerkzeugPasswordHasher
from weathergate.application.services.proxy_fetcher import ProxyFetcher
from weathergate.application.services.session_registry import SessionRegistry
from weathergate.application.services.user_directory import UserDirectory
from weathergate.application.use_cases.users.login_user import LoginUserUseCase
from weathergate.application.use_cases.users.logout_user import LogoutUserUseCase
from weathergate.application.use_cases.users.register_user import RegisterUserUseCase
from weathergate.application.use_cases.weather.check_access import CheckAccessUseCase
from weathergate.application.use_cases.weather.get_forecast import GetForecastUseCase
from weathergate.domain.users.repositories import PasswordHasher
from weathergate.domain.weather.ports import WeatherProvider
from weathergate.infrastructure.repositories.users.json_user_repository import (
    JsonSessionRepository,
    JsonUserRepository,
    open_session_store,
    open_user_store,
)
from weathergate.infrastructure.weather.openweather import OpenWeatherProvider
from weathergate.interfaces.http.controllers.auth_controller import AuthController
from weathergate.interfaces.http.controllers.misc_controller import MiscController
from weathergate.interfaces.http.controllers.weather_controller import WeatherController
from weathergate.shared.config import AppConfig


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        weather_provider: WeatherProvider | None = None,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.config = config
        self._weather_provider = weather_provider
        self._password_hasher = password_hasher

    def open_stores(self) -> None:
        """Load both backing files now so a corrupt file fails startup."""
        _ = self.user_repository
        _ = self.session_repository

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher or WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> JsonUserRepository:
        return JsonUserRepository(open_user_store(self.config.storage.users_file))

    @cached_property
    def session_repository(self) -> JsonSessionRepository:
        return JsonSessionRepository(open_session_store(self.config.storage.sessions_file))

    @cached_property
    def user_directory(self) -> UserDirectory:
        return UserDirectory(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def session_registry(self) -> SessionRegistry:
        return SessionRegistry(sessions=self.session_repository, directory=self.user_directory)

    @cached_property
    def weather_provider(self) -> WeatherProvider:
        return self._weather_provider or OpenWeatherProvider(
            self.config.weather, self.config.resilience
        )

    @cached_property
    def proxy_fetcher(self) -> ProxyFetcher:
        return ProxyFetcher(self.weather_provider)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(directory=self.user_directory, sessions=self.session_registry)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(directory=self.user_directory, sessions=self.session_registry)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_registry)

    @cached_property
    def check_access_use_case(self) -> CheckAccessUseCase:
        return CheckAccessUseCase(
            sessions=self.session_registry, rate_limit=self.config.access.rate_limit
        )

    @cached_property
    def get_forecast_use_case(self) -> GetForecastUseCase:
        return GetForecastUseCase(
            fetcher=self.proxy_fetcher, days=self.config.weather.forecast_days
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            access=self.config.access,
            security=self.config.security,
        )

    @cached_property
    def weather_controller(self) -> WeatherController:
        return WeatherController(
            check_access=self.check_access_use_case,
            get_forecast=self.get_forecast_use_case,
            access=self.config.access,
            security=self.config.security,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            directory=self.user_directory,
            sessions=self.session_registry,
            metrics_enabled=self.config.observability.metrics_enabled,
        )
