# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AccessConfig,
    AppConfig,
    ObservabilityConfig,
    ResilienceConfig,
    SecurityConfig,
    StorageConfig,
    WeatherConfig,
    load_config,
)

__all__ = [
    "AccessConfig",
    "AppConfig",
    "ObservabilityConfig",
    "ResilienceConfig",
    "SecurityConfig",
    "StorageConfig",
    "WeatherConfig",
    "load_config",
]
