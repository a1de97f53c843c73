# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bookings and the lifecycle of a booking request."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from autoservice.domain.exceptions import InvariantViolation


class BookingState(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    SLOT_CHECKED = "slot_checked"
    COMMITTED = "committed"
    REJECTED = "rejected"


class NotificationStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    QUEUED = "queued"
    SKIPPED = "skipped"


def format_slot_time(at: time) -> str:
    """Render a slot time as HH:MM, keeping seconds only when they are set."""

    if at.second:
        return at.strftime("%H:%M:%S")
    return at.strftime("%H:%M")


@dataclass(slots=True, frozen=True)
class Slot:
    """A (service, date, time) triple that admits at most one booking."""

    service_id: int
    date: date
    time: time

    def __post_init__(self) -> None:
        if self.service_id <= 0:
            raise InvariantViolation("service id must be positive", field="service_id")
        object.__setattr__(self, "time", self.time.replace(microsecond=0, tzinfo=None))


@dataclass(slots=True, frozen=True)
class Booking:

    id: int
    slot: Slot
    client_name: str
    client_email: str | None
    user_id: int | None
    created_at: datetime

    def __post_init__(self) -> None:
        if not str(self.client_name or "").strip():
            raise InvariantViolation("client name must not be empty", field="client_name")

    @property
    def service_id(self) -> int:
        return self.slot.service_id

    @property
    def date(self) -> date:
        return self.slot.date

    @property
    def time(self) -> time:
        return self.slot.time


@dataclass(slots=True, frozen=True)
class BookingRequest:

    service_id: int
    client_name: str | None
    client_email: str | None
    date: date | None
    time: time | None
    user_id: int | None = None


@dataclass(slots=True, frozen=True)
class BookingOutcome:
    """Committed booking plus the result of the confirmation attempt."""

    booking: Booking
    state: BookingState
    notification: NotificationStatus

    @property
    def notification_failed(self) -> bool:
        return self.notification is NotificationStatus.FAILED
