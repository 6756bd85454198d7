# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable

from weathergate.domain.users.entities import Session, User
from weathergate.domain.users.exceptions import (
    InconsistentStateError,
    UnknownSessionError,
)
from weathergate.domain.users.repositories import SessionRepository
from weathergate.shared.errors import TokenGenerationError
from weathergate.shared.logging import logger

from .user_directory import UserDirectory

MAX_TOKEN_ATTEMPTS = 5


def _new_token() -> str:
    return secrets.token_urlsafe(48)


class SessionRegistry:
    """Issues opaque session tokens and resolves them back to users."""

    def __init__(
        self,
        *,
        sessions: SessionRepository,
        directory: UserDirectory,
        token_factory: Callable[[], str] = _new_token,
    ) -> None:
        self._sessions = sessions
        self._directory = directory
        self._token_factory = token_factory

    def create_session(self, username: str) -> Session:
        if self._directory.find(username) is None:
            raise InconsistentStateError()
        for _ in range(MAX_TOKEN_ATTEMPTS):
            session = Session(token=self._token_factory(), username=username)
            if self._sessions.add(session):
                logger.info(
                    f"sessions.create: ok username={username} tok={session.token[:8]}…"
                )
                return session
            logger.warning(f"sessions.create: token collision username={username}")
        logger.error(f"sessions.create: no free token after {MAX_TOKEN_ATTEMPTS} attempts")
        raise TokenGenerationError(MAX_TOKEN_ATTEMPTS)

    def get_user_by_token(self, token: str | None) -> User:
        if not token:
            raise UnknownSessionError()
        session = self._sessions.get(token)
        if session is None:
            raise UnknownSessionError()
        user = self._directory.find(session.username)
        if user is None:
            logger.error(
                f"sessions.lookup: dangling session username={session.username} "
                f"tok={token[:8]}…"
            )
            raise InconsistentStateError()
        return user

    def revoke(self, token: str | None) -> bool:
        if not token:
            return False
        removed = self._sessions.remove(token)
        if removed:
            logger.info(f"sessions.revoke: ok tok={token[:8]}…")
        return removed

    def count(self) -> int:
        return self._sessions.count()
