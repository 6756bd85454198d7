# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from weathergate.domain.users.entities import User
from weathergate.domain.users.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    UnknownUserError,
)
from weathergate.domain.users.repositories import PasswordHasher, UserRepository
from weathergate.shared.logging import logger


class UserDirectory:
    """Owns user accounts: creation and credential checks."""

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def create_user(self, login: str, password: str) -> User:
        if self._users.get(login) is not None:
            raise DuplicateUserError()
        user = User(username=login, password_hash=self._password_hasher.hash(password))
        # add() repeats the check under the store lock.
        persisted = self._users.add(user)
        logger.info(f"users.create: ok username={login}")
        return persisted

    def sign_in(self, login: str, password: str) -> User:
        user = self._users.get(login)
        if user is None:
            raise UnknownUserError()
        if not self._password_hasher.verify(password, user.password_hash):
            logger.warning(f"users.sign_in: bad password username={login}")
            raise InvalidCredentialsError()
        return user

    def remove_user(self, username: str) -> bool:
        removed = self._users.remove(username)
        if removed:
            logger.info(f"users.remove: ok username={username}")
        return removed

    def find(self, username: str) -> User | None:
        return self._users.get(username)

    def count(self) -> int:
        return self._users.count()
