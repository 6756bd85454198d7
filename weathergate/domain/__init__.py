# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation
from .users.entities import Session, User
from .users.exceptions import (
    DuplicateUserError,
    InconsistentStateError,
    InvalidCredentialsError,
    UnknownSessionError,
    UnknownUserError,
)
from .weather.entities import ConditionsReport, Location
from .weather.exceptions import LocationNotFoundError

__all__ = [
    "ConditionsReport",
    "DuplicateUserError",
    "InconsistentStateError",
    "InvalidCredentialsError",
    "InvariantViolation",
    "Location",
    "LocationNotFoundError",
    "Session",
    "UnknownSessionError",
    "UnknownUserError",
    "User",
]
