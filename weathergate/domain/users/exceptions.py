# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from weathergate.shared.errors.base import DomainError


class DuplicateUserError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT
    message = "User with this login already exists"


class UnknownUserError(DomainError):
    code = "unknown_user"
    status = HTTPStatus.UNAUTHORIZED
    message = "User not found"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid login or password"


class UnknownSessionError(DomainError):
    code = "unknown_session"
    status = HTTPStatus.UNAUTHORIZED
    message = "Session not found"


class InconsistentStateError(DomainError):
    code = "inconsistent_state"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Session refers to a user that does not exist"
