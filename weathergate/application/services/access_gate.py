# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Counter-driven admission rule for the weather proxy.

Anonymous callers get ``rate_limit - 1`` free requests in every window of
``rate_limit``; the request that brings the counter to a multiple of the
limit is turned away to the login page. Authenticated callers always pass.
"""

from __future__ import annotations

from dataclasses import dataclass

RATE_LIMIT = 15


@dataclass(slots=True, frozen=True)
class AccessDecision:
    admit: bool
    counter: int


def parse_counter(raw: str | int | None) -> int:
    """Round-tripped counter value; anything that is not a non-negative integer is 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(raw, 0)
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        return 0
    try:
        return int(text)
    except ValueError:
        # Longer than the interpreter's int-string limit.
        return 0


def decide(
    counter_before: str | int | None,
    is_authenticated: bool,
    *,
    rate_limit: int = RATE_LIMIT,
) -> AccessDecision:
    counter = parse_counter(counter_before) + 1
    if counter % rate_limit == 0 and not is_authenticated:
        return AccessDecision(admit=False, counter=counter)
    return AccessDecision(admit=True, counter=counter)


__all__ = ["RATE_LIMIT", "AccessDecision", "decide", "parse_counter"]
