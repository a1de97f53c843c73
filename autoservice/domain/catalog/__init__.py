# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import WEEKDAYS, Service, ServiceFilter, normalize_weekday
from .exceptions import NotFoundError, ServiceNotFoundError

__all__ = [
    "WEEKDAYS",
    "NotFoundError",
    "Service",
    "ServiceFilter",
    "ServiceNotFoundError",
    "normalize_weekday",
]
