# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from weathergate.shared.errors.base import DomainError


class LocationNotFoundError(DomainError):
    code = "location_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "City not found"
