# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from weathergate.application.services.session_registry import SessionRegistry
from weathergate.application.services.user_directory import UserDirectory
from weathergate.domain.users.entities import Session, User
from weathergate.shared.errors import AppError, StorageIOError
from weathergate.shared.logging import logger


class RegisterUserUseCase:
    def __init__(self, *, directory: UserDirectory, sessions: SessionRegistry) -> None:
        self._directory = directory
        self._sessions = sessions

    def execute(self, login: str, password: str) -> tuple[User, Session]:
        user = self._directory.create_user(login, password)
        try:
            session = self._sessions.create_session(user.username)
        except AppError as exc:
            # Undo the account so the client can retry the same sign-up.
            logger.warning(f"auth.sign_up: session failed ({exc.code}), removing {user.username}")
            try:
                self._directory.remove_user(user.username)
            except StorageIOError as cleanup_exc:
                logger.error(
                    f"auth.sign_up: account {user.username} left without session: {cleanup_exc}"
                )
            raise
        return user, session
