"""In-memory stand-ins for the repository and port protocols."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from autoservice.domain.bookings.entities import Booking, Slot
from autoservice.domain.bookings.exceptions import NotificationError, SlotTakenError
from autoservice.domain.bookings.repositories import BookingRepository
from autoservice.domain.catalog.entities import Service, ServiceFilter
from autoservice.domain.catalog.repositories import ServiceRepository
from autoservice.domain.users.entities import User
from autoservice.domain.users.exceptions import DuplicateUserError
from autoservice.domain.users.repositories import PasswordHasher, UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        for existing in self._users.values():
            if existing.username == user.username or existing.email == user.email:
                raise DuplicateUserError()
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


class InMemoryServiceRepository(ServiceRepository):
    def __init__(self) -> None:
        self._rows: dict[int, Service] = {}

    def search(self, criteria: ServiceFilter) -> Sequence[Service]:
        return [s for _, s in sorted(self._rows.items()) if criteria.matches(s)]

    def find_by_id(self, service_id: int) -> Service | None:
        return self._rows.get(service_id)

    def add(self, service: Service) -> Service:
        created = replace(service, id=len(self._rows) + 1)
        self._rows[created.id] = created
        return created


class InMemoryBookingRepository(BookingRepository):
    def __init__(self) -> None:
        self.rows: list[Booking] = []

    def add(self, booking: Booking) -> Booking:
        if any(row.slot == booking.slot for row in self.rows):
            raise SlotTakenError(booking.service_id, booking.date, booking.time)
        created = replace(booking, id=len(self.rows) + 1)
        self.rows.append(created)
        return created

    def count_for_slot(self, slot: Slot) -> int:
        return sum(1 for row in self.rows if row.slot == slot)


class RecordingNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.sent: list[tuple] = []
        self._fail = fail

    def send_booking_confirmation(self, to, client_name, service_name, day, at) -> None:
        if self._fail:
            raise NotificationError("smtp down")
        self.sent.append((to, client_name, service_name, day, at))
