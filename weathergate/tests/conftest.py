from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from weathergate.application.services.session_registry import SessionRegistry
from weathergate.application.services.user_directory import UserDirectory
from weathergate.domain.users.repositories import PasswordHasher
from weathergate.infrastructure.repositories.users.json_user_repository import (
    JsonSessionRepository,
    JsonUserRepository,
    open_session_store,
    open_user_store,
)
from weathergate.shared.config import AppConfig


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class StubWeatherProvider:
    def __init__(
        self,
        matches: list[dict[str, Any]] | None = None,
        report: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.matches = (
            [{"name": "London", "lat": 51.5073, "lon": -0.1276, "country": "GB"}]
            if matches is None
            else matches
        )
        self.report = report or {
            "name": "London",
            "main": {"temp": 12.3, "humidity": 81},
            "weather": [{"description": "overcast clouds"}],
        }
        self.error = error
        self.calls: list[tuple[Any, ...]] = []

    async def geocode(self, city: str) -> list[dict[str, Any]]:
        self.calls.append(("geocode", city))
        if self.error is not None:
            raise self.error
        return self.matches

    async def current_conditions(self, lat: float, lon: float) -> dict[str, Any]:
        self.calls.append(("conditions", lat, lon))
        return self.report


@pytest.fixture()
def users_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "users.json"


@pytest.fixture()
def sessions_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "sessions.json"


@pytest.fixture()
def app_config(users_file: Path, sessions_file: Path) -> AppConfig:
    return AppConfig(
        LOG_FILE=None,
        storage={"users_file": str(users_file), "sessions_file": str(sessions_file)},
        weather={"api_key": "test-key"},
        resilience={"max_retries": 0, "backoff_base": 0.0, "backoff_cap": 0.0},
    )


@pytest.fixture()
def directory(users_file: Path) -> UserDirectory:
    return UserDirectory(
        users=JsonUserRepository(open_user_store(users_file)),
        password_hasher=DeterministicHasher(),
    )


@pytest.fixture()
def registry(sessions_file: Path, directory: UserDirectory) -> SessionRegistry:
    return SessionRegistry(
        sessions=JsonSessionRepository(open_session_store(sessions_file)),
        directory=directory,
    )
