# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict
from pathlib import Path
from typing import Any

from weathergate.domain.users.entities import Session, User
from weathergate.domain.users.exceptions import DuplicateUserError
from weathergate.domain.users.repositories import SessionRepository, UserRepository
from weathergate.infrastructure.storage import JsonFileStore


def _decode_user(raw: Mapping[str, Any]) -> User:
    return User(username=str(raw["username"]), password_hash=str(raw["password_hash"]))


def _decode_session(raw: Mapping[str, Any]) -> Session:
    return Session(token=str(raw["token"]), username=str(raw["username"]))


def _username_of(user: User) -> str:
    return user.username


def _token_of(session: Session) -> str:
    return session.token


def open_user_store(path: Path) -> JsonFileStore[User]:
    return JsonFileStore.open(path, encode=asdict, decode=_decode_user, key_of=_username_of)


def open_session_store(path: Path) -> JsonFileStore[Session]:
    return JsonFileStore.open(path, encode=asdict, decode=_decode_session, key_of=_token_of)


class JsonUserRepository(UserRepository):
    def __init__(self, store: JsonFileStore[User]) -> None:
        self._store = store

    def get(self, username: str) -> User | None:
        return self._store.get(username)

    def add(self, user: User) -> User:
        with self._store.transaction() as users:
            if user.username in users:
                raise DuplicateUserError()
            users[user.username] = user
        return user

    def remove(self, username: str) -> bool:
        if self._store.get(username) is None:
            return False
        with self._store.transaction() as users:
            return users.pop(username, None) is not None

    def count(self) -> int:
        return len(self._store)


class JsonSessionRepository(SessionRepository):
    def __init__(self, store: JsonFileStore[Session]) -> None:
        self._store = store

    def get(self, token: str) -> Session | None:
        return self._store.get(token)

    def add(self, session: Session) -> bool:
        with self._store.transaction() as sessions:
            if session.token in sessions:
                return False
            sessions[session.token] = session
        return True

    def remove(self, token: str) -> bool:
        if self._store.get(token) is None:
            return False
        with self._store.transaction() as sessions:
            return sessions.pop(token, None) is not None

    def count(self) -> int:
        return len(self._store)
