# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from weathergate.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:
    """Account keyed by its login name. Only a one-way password hash is kept."""

    username: str
    password_hash: str

    def __post_init__(self) -> None:
        if not self.username:
            raise InvariantViolation("must not be empty", field="username")
        if not self.password_hash:
            raise InvariantViolation("must not be empty", field="password_hash")


@dataclass(slots=True, frozen=True)
class Session:
    """Binding of an opaque token to the username that owns it."""

    token: str
    username: str

    def __post_init__(self) -> None:
        if not self.token:
            raise InvariantViolation("must not be empty", field="token")
        if not self.username:
            raise InvariantViolation("must not be empty", field="username")
