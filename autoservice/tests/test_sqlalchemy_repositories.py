from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, date, datetime, time
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session, sessionmaker

from autoservice.application.use_cases.bookings.book_service import BookServiceUseCase
from autoservice.domain.bookings.entities import Booking, BookingRequest, Slot
from autoservice.domain.bookings.exceptions import SlotTakenError
from autoservice.domain.catalog.entities import Service, ServiceFilter
from autoservice.domain.catalog.exceptions import NotFoundError
from autoservice.domain.users.entities import Role, User
from autoservice.domain.users.exceptions import DuplicateUserError
from autoservice.infrastructure.db.models import Service as ServiceRow
from autoservice.infrastructure.repositories.sqlalchemy import (
    SqlAlchemyBookingRepository,
    SqlAlchemyServiceRepository,
)
from autoservice.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from autoservice.infrastructure.unit_of_work import unit_of_work_scope

from .fakes import RecordingNotifier


def _user(username: str, email: str) -> User:
    return User(
        id=0,
        username=username,
        email=email,
        password_hash="hash",
        role=Role.CLIENT,
        created_at=datetime.now(UTC),
    )


def _service(name: str, location: str, rate: str, slots: dict | None = None) -> Service:
    return Service(
        id=0,
        name=name,
        location=location,
        contact_info=None,
        hourly_rate=Decimal(rate),
        available_slots=slots or {},
    )


def _booking(service_id: int, at: time = time(10, 0), name: str = "Ann") -> Booking:
    return Booking(
        id=0,
        slot=Slot(service_id=service_id, date=date(2024, 5, 1), time=at),
        client_name=name,
        client_email=None,
        user_id=None,
        created_at=datetime.now(UTC),
    )


@pytest.fixture()
def services(session_factory: sessionmaker[Session]) -> SqlAlchemyServiceRepository:
    repo = SqlAlchemyServiceRepository(session_factory)
    repo.add(_service("Tyres", "London", "30", {"monday": ["09:00"], "sunday": None}))
    repo.add(_service("Detailing", "Paris", "80", {"friday": ["10:00"]}))
    repo.add(_service("Brakes", "New London", "50"))
    repo.add(_service("Promo", "100%_off", "10"))
    return repo


def test_user_repository_roundtrip(session_factory) -> None:
    users = SqlAlchemyUserRepository(session_factory)
    created = users.add(_user("alice", "Alice@Example.com"))

    assert created.id > 0
    found = users.find_by_email("alice@example.com")
    assert found is not None
    assert found.role is Role.CLIENT
    assert users.find_by_id(created.id).username == "alice"
    assert users.find_by_email("nobody@example.com") is None


@pytest.mark.parametrize(
    ("username", "email"),
    [("alice", "other@example.com"), ("bob", "alice@example.com")],
)
def test_user_repository_enforces_uniqueness(session_factory, username, email) -> None:
    users = SqlAlchemyUserRepository(session_factory)
    users.add(_user("alice", "alice@example.com"))

    with pytest.raises(DuplicateUserError):
        users.add(_user(username, email))


def test_search_without_filters_is_in_id_order(services) -> None:
    assert [s.name for s in services.search(ServiceFilter())] == [
        "Tyres",
        "Detailing",
        "Brakes",
        "Promo",
    ]


def test_search_max_rate_and_location(services) -> None:
    assert [s.name for s in services.search(ServiceFilter(max_rate=Decimal("50")))] == [
        "Tyres",
        "Brakes",
        "Promo",
    ]
    assert [s.name for s in services.search(ServiceFilter(location="lon"))] == [
        "Tyres",
        "Brakes",
    ]


def test_search_location_escapes_wildcards(services) -> None:
    assert [s.name for s in services.search(ServiceFilter(location="%"))] == ["Promo"]
    assert [s.name for s in services.search(ServiceFilter(location="_"))] == ["Promo"]


def test_search_available_day(services) -> None:
    assert [s.name for s in services.search(ServiceFilter(available_day="Monday"))] == ["Tyres"]
    assert services.search(ServiceFilter(available_day="sunday")) == []


def test_search_lists_rows_with_free_form_availability(services, session_factory) -> None:
    with unit_of_work_scope(session_factory) as session:
        session.add(
            ServiceRow(
                name="Legacy",
                location="Leeds",
                contact_info=None,
                hourly_rate=Decimal("15"),
                available_slots={"Mon": "9-17", "holidays": None},
            )
        )

    listed = services.search(ServiceFilter(location="leeds"))
    assert [s.name for s in listed] == ["Legacy"]
    assert listed[0].available_slots == {"Mon": "9-17", "holidays": None}
    assert [s.name for s in services.search(ServiceFilter(available_day="monday"))] == ["Tyres"]


def test_service_roundtrip_keeps_decimal_rate(services) -> None:
    found = services.find_by_id(2)
    assert found is not None
    assert found.hourly_rate == Decimal("80")
    assert found.available_slots == {"friday": ["10:00"]}
    assert services.find_by_id(999) is None


def test_booking_slot_is_unique(services, session_factory) -> None:
    bookings = SqlAlchemyBookingRepository(session_factory)
    bookings.add(_booking(1))

    with pytest.raises(SlotTakenError):
        bookings.add(_booking(1, time(10, 0, 0), name="Bob"))

    bookings.add(_booking(1, time(11, 0)))
    bookings.add(_booking(2))
    assert bookings.count_for_slot(Slot(1, date(2024, 5, 1), time(10, 0))) == 1


def test_booking_for_missing_service_maps_to_not_found(services, session_factory) -> None:
    bookings = SqlAlchemyBookingRepository(session_factory)

    with pytest.raises(NotFoundError):
        bookings.add(_booking(999))


def test_documented_example_slot(session_factory) -> None:
    with unit_of_work_scope(session_factory) as session:
        session.add(ServiceRow(id=7, name="Wash", location="Leeds", hourly_rate=Decimal("20")))

    use_case = BookServiceUseCase(
        services=SqlAlchemyServiceRepository(session_factory),
        bookings=SqlAlchemyBookingRepository(session_factory),
        notifier=RecordingNotifier(),
    )
    first = BookingRequest(
        service_id=7,
        client_name="Ann",
        client_email=None,
        date=date(2024, 5, 1),
        time=time(10, 0),
    )
    use_case.execute(first)

    with pytest.raises(SlotTakenError):
        use_case.execute(
            BookingRequest(
                service_id=7,
                client_name="Bob",
                client_email=None,
                date=date(2024, 5, 1),
                time=time(10, 0),
            )
        )

    bookings = SqlAlchemyBookingRepository(session_factory)
    assert bookings.count_for_slot(Slot(7, date(2024, 5, 1), time(10, 0))) == 1


def test_concurrent_bookings_for_one_slot_admit_exactly_one(services, session_factory) -> None:
    callers = 8
    use_case = BookServiceUseCase(
        services=services,
        bookings=SqlAlchemyBookingRepository(session_factory),
        notifier=RecordingNotifier(),
    )
    barrier = threading.Barrier(callers)

    def attempt(n: int) -> str:
        barrier.wait()
        try:
            use_case.execute(
                BookingRequest(
                    service_id=1,
                    client_name=f"client-{n}",
                    client_email=None,
                    date=date(2024, 5, 1),
                    time=time(10, 0),
                )
            )
        except SlotTakenError:
            return "taken"
        return "ok"

    with ThreadPoolExecutor(max_workers=callers) as pool:
        results = list(pool.map(attempt, range(callers)))

    assert results.count("ok") == 1
    assert results.count("taken") == callers - 1
    bookings = SqlAlchemyBookingRepository(session_factory)
    assert bookings.count_for_slot(Slot(1, date(2024, 5, 1), time(10, 0))) == 1
