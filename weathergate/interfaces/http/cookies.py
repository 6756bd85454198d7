# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Request, Response

from weathergate.shared.config import SecurityConfig

TOKEN_COOKIE = "Token"
COUNTER_COOKIE = "Counter"


def extract_token(req: Request) -> str:
    auth_header = req.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        if token:
            return token
    return req.cookies.get(TOKEN_COOKIE, "")


def set_token_cookie(response: Response, token: str, security: SecurityConfig) -> None:
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        httponly=True,
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
    )


def set_counter_cookie(response: Response, counter: int, security: SecurityConfig) -> None:
    response.set_cookie(
        COUNTER_COOKIE,
        str(counter),
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
    )


__all__ = [
    "COUNTER_COOKIE",
    "TOKEN_COOKIE",
    "extract_token",
    "set_counter_cookie",
    "set_token_cookie",
]
