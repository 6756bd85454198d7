# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, request

from weathergate.application.use_cases.users.login_user import LoginUserUseCase
from weathergate.application.use_cases.users.logout_user import LogoutUserUseCase
from weathergate.application.use_cases.users.register_user import RegisterUserUseCase
from weathergate.interfaces.http.cookies import (
    TOKEN_COOKIE,
    extract_token,
    set_token_cookie,
)
from weathergate.interfaces.http.dto.auth import CredentialsRequestDTO
from weathergate.interfaces.http.dto.envelope import redirect_response
from weathergate.shared.config import AccessConfig, SecurityConfig
from weathergate.shared.errors.validation import parse_model
from weathergate.shared.logging import logger
from weathergate.shared.middleware.rate_limit import InMemoryRateLimiter, rate_limit


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        access: AccessConfig,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._access = access
        self._security = security

    def sign_up(self) -> tuple[Response, int]:
        dto = parse_model(CredentialsRequestDTO, request.get_json(silent=True) or {})

        user, session = self._register_use_case.execute(dto.login, dto.password)

        response = redirect_response(self._access.home_route)
        set_token_cookie(response, session.token, self._security)
        logger.info(f"auth.sign_up: ok username={user.username}")
        return response, 200

    def sign_in(self) -> tuple[Response, int]:
        dto = parse_model(CredentialsRequestDTO, request.get_json(silent=True) or {})

        user, session = self._login_use_case.execute(dto.login, dto.password)

        response = redirect_response(self._access.home_route)
        set_token_cookie(response, session.token, self._security)
        logger.info(f"auth.sign_in: ok username={user.username}")
        return response, 200

    def sign_out(self) -> tuple[Response, int]:
        revoked = self._logout_use_case.execute(extract_token(request))

        response = redirect_response(self._access.login_route)
        response.delete_cookie(TOKEN_COOKIE)
        logger.info(f"auth.sign_out: ok revoked={revoked}")
        return response, 200

    def _limiter(self) -> InMemoryRateLimiter | None:
        if not self._security.enable_rate_limit:
            return None
        return InMemoryRateLimiter(
            self._security.rate_limit_requests, self._security.rate_limit_window
        )

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule(
            "/sign-up",
            view_func=rate_limit(self._limiter())(self.sign_up),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/sign-in",
            view_func=rate_limit(self._limiter())(self.sign_in),
            methods=["POST"],
        )
        bp.add_url_rule("/sign-out", view_func=self.sign_out, methods=["POST"])
        return bp
