"""Use-case for revoking session tokens."""

from __future__ import annotations

from weathergate.application.services.session_registry import SessionRegistry


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRegistry) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> bool:
        return self._sessions.revoke(token)
