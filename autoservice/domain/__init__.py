# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .bookings import (
    Booking,
    BookingOutcome,
    BookingRequest,
    BookingState,
    NotificationError,
    NotificationStatus,
    Slot,
    SlotTakenError,
)
from .catalog import NotFoundError, Service, ServiceFilter, ServiceNotFoundError
from .exceptions import InvariantViolation, InvariantViolationError
from .users import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    Role,
    SessionToken,
    TokenClaims,
    User,
)

__all__ = [
    "Booking",
    "BookingOutcome",
    "BookingRequest",
    "BookingState",
    "DuplicateUserError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "InvariantViolation",
    "InvariantViolationError",
    "MissingTokenError",
    "NotFoundError",
    "NotificationError",
    "NotificationStatus",
    "Role",
    "Service",
    "ServiceFilter",
    "ServiceNotFoundError",
    "SessionToken",
    "Slot",
    "SlotTakenError",
    "TokenClaims",
    "User",
]
