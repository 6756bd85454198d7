# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Uniform response wrapper shared by every endpoint."""

from __future__ import annotations

from typing import Any, Literal

from flask import Response, jsonify
from pydantic import BaseModel


class SuccessEnvelope(BaseModel):
    type: Literal["success"] = "success"
    payload: Any = None


class ErrorEnvelope(BaseModel):
    type: Literal["error"] = "error"
    message: str
    code: str | None = None


class RedirectEnvelope(BaseModel):
    type: Literal["redirect"] = "redirect"
    route: str


def success_response(payload: Any) -> Response:
    return jsonify(SuccessEnvelope(payload=payload).model_dump())


def redirect_response(route: str) -> Response:
    return jsonify(RedirectEnvelope(route=route).model_dump())


__all__ = [
    "ErrorEnvelope",
    "RedirectEnvelope",
    "SuccessEnvelope",
    "redirect_response",
    "success_response",
]
