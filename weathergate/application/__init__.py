# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.access_gate import AccessDecision, decide
from .services.proxy_fetcher import ProxyFetcher
from .services.session_registry import SessionRegistry
from .services.user_directory import UserDirectory

__all__ = [
    "AccessDecision",
    "ProxyFetcher",
    "SessionRegistry",
    "UserDirectory",
    "decide",
]
