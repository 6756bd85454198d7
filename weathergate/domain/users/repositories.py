# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Session, User


class UserRepository(Protocol):
    def get(self, username: str) -> User | None: ...
    def add(self, user: User) -> User: ...
    def remove(self, username: str) -> bool: ...
    def count(self) -> int: ...


class SessionRepository(Protocol):
    def get(self, token: str) -> Session | None: ...
    def add(self, session: Session) -> bool: ...
    def remove(self, token: str) -> bool: ...
    def count(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
