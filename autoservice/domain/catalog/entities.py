# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Service listings and the search filter applied to them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from autoservice.domain.exceptions import InvariantViolation

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def normalize_weekday(value: str) -> str:
    day = str(value or "").strip().lower()
    if day not in WEEKDAYS:
        raise InvariantViolation(f"unknown weekday {value!r}", field="available_day")
    return day


def _slot_key(day: str) -> str:
    # Weekday names are case-folded; any other key is kept as given
    folded = str(day).strip().lower()
    return folded if folded in WEEKDAYS else str(day)


@dataclass(slots=True, frozen=True)
class Service:
    """A bookable offering with an hourly rate and weekly availability."""

    id: int
    name: str
    location: str
    contact_info: str | None
    hourly_rate: Decimal
    available_slots: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hourly_rate", Decimal(str(self.hourly_rate)))
        if self.hourly_rate < 0:
            raise InvariantViolation("hourly rate must be non-negative", field="hourly_rate")
        if not str(self.name or "").strip():
            raise InvariantViolation("name must not be empty", field="name")
        slots = {_slot_key(day): info for day, info in (self.available_slots or {}).items()}
        object.__setattr__(self, "available_slots", slots)

    def is_available_on(self, day: str) -> bool:
        return self.available_slots.get(normalize_weekday(day)) is not None


@dataclass(slots=True, frozen=True)
class ServiceFilter:
    """Conjunctive search constraints; every field is optional."""

    location: str | None = None
    max_rate: Decimal | None = None
    available_day: str | None = None

    def __post_init__(self) -> None:
        location = (self.location or "").strip() or None
        object.__setattr__(self, "location", location)
        if self.max_rate is not None:
            rate = Decimal(str(self.max_rate))
            if rate < 0:
                raise InvariantViolation("max rate must be non-negative", field="max_rate")
            object.__setattr__(self, "max_rate", rate)
        if self.available_day is not None:
            object.__setattr__(self, "available_day", normalize_weekday(self.available_day))

    def matches(self, service: Service) -> bool:
        """Return whether the service satisfies every configured constraint."""

        if self.location and self.location.lower() not in (service.location or "").lower():
            return False
        if self.max_rate is not None and service.hourly_rate > self.max_rate:
            return False
        if self.available_day and not service.is_available_on(self.available_day):
            return False
        return True
