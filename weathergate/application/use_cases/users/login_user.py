# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from weathergate.application.services.session_registry import SessionRegistry
from weathergate.application.services.user_directory import UserDirectory
from weathergate.domain.users.entities import Session, User


class LoginUserUseCase:
    def __init__(self, *, directory: UserDirectory, sessions: SessionRegistry) -> None:
        self._directory = directory
        self._sessions = sessions

    def execute(self, login: str, password: str) -> tuple[User, Session]:
        user = self._directory.sign_in(login, password)
        session = self._sessions.create_session(user.username)
        return user, session
