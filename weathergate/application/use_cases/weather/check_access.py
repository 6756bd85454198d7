# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from weathergate.application.services.access_gate import AccessDecision, decide
from weathergate.application.services.session_registry import SessionRegistry
from weathergate.domain.users.entities import User
from weathergate.domain.users.exceptions import (
    InconsistentStateError,
    UnknownSessionError,
)
from weathergate.shared.logging import logger


class CheckAccessUseCase:
    """Resolves the optional caller identity and applies the access gate."""

    def __init__(self, *, sessions: SessionRegistry, rate_limit: int) -> None:
        self._sessions = sessions
        self._rate_limit = rate_limit

    def resolve_user(self, token: str | None) -> User | None:
        try:
            return self._sessions.get_user_by_token(token)
        except UnknownSessionError:
            return None
        except InconsistentStateError:
            logger.warning("access.check: treating dangling session as anonymous")
            return None

    def execute(self, token: str | None, counter: str | None) -> tuple[AccessDecision, User | None]:
        user = self.resolve_user(token)
        decision = decide(counter, user is not None, rate_limit=self._rate_limit)
        if not decision.admit:
            logger.info(f"access.check: denied counter={decision.counter}")
        return decision, user
