# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    Booking,
    BookingOutcome,
    BookingRequest,
    BookingState,
    NotificationStatus,
    Slot,
    format_slot_time,
)
from .exceptions import NotificationError, SlotTakenError

__all__ = [
    "Booking",
    "BookingOutcome",
    "BookingRequest",
    "BookingState",
    "NotificationError",
    "NotificationStatus",
    "Slot",
    "SlotTakenError",
    "format_slot_time",
]
