# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

ConditionsReport: TypeAlias = dict[str, Any]


@dataclass(slots=True, frozen=True)
class Location:
    lat: float
    lon: float
