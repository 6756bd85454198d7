# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Resilience utilities (timeouts, retries, circuit breaker)."""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from weathergate.shared.config import ResilienceConfig
from weathergate.shared.logging import logger

T = TypeVar("T")

RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (httpx.TransportError, TimeoutError)


class CircuitOpenError(RuntimeError):
    pass


@dataclass
class CircuitBreaker:
    """Simple in-memory circuit breaker."""

    failure_threshold: int
    reset_timeout: float
    clock: Callable[[], float] = time.monotonic
    _failures: int = field(default=0, init=False)
    _opened_at: float | None = field(default=None, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def allow(self) -> bool:
        with self._lock:
            if self._opened_at is None:
                return True
            if self.clock() - self._opened_at >= self.reset_timeout:
                logger.info("breaker: half-open state")
                self._opened_at = None
                self._failures = 0
                return True
        logger.warning("breaker: open state refusing call")
        return False

    def on_success(self) -> None:
        with self._lock:
            self._failures = 0
            self._opened_at = None

    def on_failure(self) -> None:
        with self._lock:
            self._failures += 1
            if self._failures >= self.failure_threshold and self._opened_at is None:
                self._opened_at = self.clock()
                logger.error(f"breaker: opening circuit after {self._failures} failures")

    @classmethod
    def from_config(cls, policy: ResilienceConfig) -> CircuitBreaker:
        return cls(
            failure_threshold=policy.circuit_fail_threshold,
            reset_timeout=policy.circuit_reset_timeout,
        )


async def resilient_call(  # noqa: UP047
    func: Callable[..., Awaitable[T]],
    *args: Any,
    policy: ResilienceConfig,
    breaker: CircuitBreaker | None = None,
    timeout: float | None = None,
    **kwargs: Any,
) -> T:
    """Execute call with retries, timeout, and optional circuit breaker."""

    if breaker is not None and not breaker.allow():
        raise CircuitOpenError("Circuit breaker is open")

    timeout = timeout or policy.default_timeout

    retry = AsyncRetrying(
        stop=stop_after_attempt(policy.max_retries + 1),
        wait=wait_exponential(multiplier=policy.backoff_base, max=policy.backoff_cap),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        reraise=True,
    )

    try:
        async for attempt in retry:
            with attempt:
                logger.debug(
                    f"resilience: attempt={attempt.retry_state.attempt_number} "
                    f"func={getattr(func, '__name__', func)}"
                )
                result = await asyncio.wait_for(func(*args, **kwargs), timeout=timeout)
    except Exception:
        if breaker is not None:
            breaker.on_failure()
        raise

    if breaker is not None:
        breaker.on_success()
    return result


__all__ = ["CircuitBreaker", "CircuitOpenError", "resilient_call"]
