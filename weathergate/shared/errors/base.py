# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.code.replace("_", " ").capitalize()
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "error",
            "message": self.message,
            "code": self.code,
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(str, getattr(self, "message", ""))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        message: str = "",
        *,
        code: str = "infrastructure_error",
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(
            code=code, status=resolved_status, message=message, context=context
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "Invalid request",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            message=message,
            context=context,
        )


class StorageIOError(InfrastructureError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            "Storage is unavailable",
            code="storage_io_error",
        )
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class TokenGenerationError(InfrastructureError):
    def __init__(self, attempts: int) -> None:
        super().__init__(
            "Could not start a session, try again",
            code="token_generation_failed",
            status=HTTPStatus.SERVICE_UNAVAILABLE,
        )
        self.attempts = attempts


class ExternalProviderError(InfrastructureError):
    def __init__(self, reason: str, *, endpoint: str | None = None) -> None:
        context = {"endpoint": endpoint} if endpoint else None
        super().__init__(
            "Weather provider is unavailable",
            code="external_provider_error",
            status=HTTPStatus.BAD_GATEWAY,
            context=context,
        )
        self.reason = reason

    def __str__(self) -> str:
        return self.reason
