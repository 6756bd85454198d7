# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response

from weathergate.application.services.session_registry import SessionRegistry
from weathergate.application.services.user_directory import UserDirectory
from weathergate.infrastructure.observability import render_metrics
from weathergate.interfaces.http.dto.envelope import success_response


class MiscController:
    def __init__(
        self,
        *,
        directory: UserDirectory,
        sessions: SessionRegistry,
        metrics_enabled: bool = True,
    ) -> None:
        self._directory = directory
        self._sessions = sessions
        self._metrics_enabled = metrics_enabled

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        if self._metrics_enabled:
            bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self) -> Response:
        return success_response(
            {
                "ok": True,
                "users": self._directory.count(),
                "sessions": self._sessions.count(),
            }
        )

    def metrics(self) -> Response:
        body, content_type = render_metrics()
        return Response(body, content_type=content_type)
