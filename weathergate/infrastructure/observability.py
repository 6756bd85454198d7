# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from flask import Flask, g, request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_LATENCY = Histogram(
    "weathergate_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
)
REQUEST_COUNTER = Counter(
    "weathergate_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
ACCESS_DECISIONS = Counter(
    "weathergate_access_decisions_total",
    "Access gate outcomes on the weather endpoint",
    labelnames=("outcome", "authenticated"),
)
PROVIDER_CALLS = Counter(
    "weathergate_provider_calls_total",
    "Calls to the weather provider",
    labelnames=("endpoint", "outcome"),
)


def record_access(admit: bool, authenticated: bool) -> None:
    ACCESS_DECISIONS.labels(
        outcome="admit" if admit else "deny",
        authenticated=str(authenticated).lower(),
    ).inc()


def record_provider_call(endpoint: str, outcome: str) -> None:
    PROVIDER_CALLS.labels(endpoint=endpoint, outcome=outcome).inc()


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


def configure_metrics(app: Flask, *, enabled: bool = True) -> None:
    if not enabled:
        return

    @app.before_request
    def _start_timer() -> None:
        g.metrics_start_time = time.perf_counter()

    @app.after_request
    def _observe(response):
        # Unmatched routes share one label.
        endpoint = request.url_rule.rule if request.url_rule else "unmatched"
        start = getattr(g, "metrics_start_time", None)
        if start is not None:
            REQUEST_LATENCY.labels(endpoint=endpoint).observe(time.perf_counter() - start)
        REQUEST_COUNTER.labels(endpoint=endpoint, status=str(response.status_code)).inc()
        return response


__all__ = [
    "ACCESS_DECISIONS",
    "PROVIDER_CALLS",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "configure_metrics",
    "record_access",
    "record_provider_call",
    "render_metrics",
]
