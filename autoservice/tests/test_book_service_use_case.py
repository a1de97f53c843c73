from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from datetime import date, time
from decimal import Decimal

import pytest
from loguru import logger

from autoservice.application.use_cases.bookings.book_service import BookServiceUseCase
from autoservice.domain.bookings.entities import (
    BookingRequest,
    BookingState,
    NotificationStatus,
    Slot,
)
from autoservice.domain.bookings.exceptions import SlotTakenError
from autoservice.domain.catalog.entities import Service
from autoservice.domain.catalog.exceptions import NotFoundError
from autoservice.shared.errors import ValidationError

from .fakes import InMemoryBookingRepository, InMemoryServiceRepository, RecordingNotifier


class InlineExecutor:
    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn, *args, **kwargs) -> Future:
        self.submitted += 1
        future: Future = Future()
        future.set_result(fn(*args, **kwargs))
        return future


@pytest.fixture()
def services() -> InMemoryServiceRepository:
    repo = InMemoryServiceRepository()
    repo.add(
        Service(
            id=0,
            name="Oil change",
            location="London",
            contact_info=None,
            hourly_rate=Decimal("40"),
        )
    )
    return repo


@pytest.fixture()
def log_messages() -> list[str]:
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture()
def bookings() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


def _request(**overrides) -> BookingRequest:
    fields = {
        "service_id": 1,
        "client_name": "Ann",
        "client_email": "ann@example.com",
        "date": date(2024, 5, 1),
        "time": time(10, 0),
        "user_id": 3,
    }
    fields.update(overrides)
    return BookingRequest(**fields)


def test_booking_commits_and_notifies(services, bookings) -> None:
    notifier = RecordingNotifier()
    use_case = BookServiceUseCase(services=services, bookings=bookings, notifier=notifier)

    outcome = use_case.execute(_request())

    assert outcome.state is BookingState.COMMITTED
    assert outcome.notification is NotificationStatus.SENT
    assert outcome.booking.id == 1
    assert outcome.booking.user_id == 3
    assert notifier.sent == [
        ("ann@example.com", "Ann", "Oil change", date(2024, 5, 1), time(10, 0))
    ]


def test_second_booking_for_same_slot_is_rejected(services, bookings) -> None:
    use_case = BookServiceUseCase(
        services=services, bookings=bookings, notifier=RecordingNotifier()
    )
    use_case.execute(_request())

    with pytest.raises(SlotTakenError):
        use_case.execute(_request(client_name="Bob", time=time(10, 0, 0)))

    assert bookings.count_for_slot(Slot(1, date(2024, 5, 1), time(10, 0))) == 1


def test_unknown_service_persists_nothing(services, bookings) -> None:
    notifier = RecordingNotifier()
    use_case = BookServiceUseCase(services=services, bookings=bookings, notifier=notifier)

    with pytest.raises(NotFoundError):
        use_case.execute(_request(service_id=99))

    assert bookings.rows == []
    assert notifier.sent == []


@pytest.mark.parametrize("field", ["client_name", "date", "time"])
def test_missing_required_field(services, bookings, field) -> None:
    use_case = BookServiceUseCase(
        services=services, bookings=bookings, notifier=RecordingNotifier()
    )

    with pytest.raises(ValidationError) as info:
        use_case.execute(_request(**{field: None}))

    assert info.value.context["fields"] == [field]
    assert bookings.rows == []


def test_notification_failure_keeps_booking(services, bookings) -> None:
    use_case = BookServiceUseCase(
        services=services, bookings=bookings, notifier=RecordingNotifier(fail=True)
    )

    outcome = use_case.execute(_request())

    assert outcome.state is BookingState.COMMITTED
    assert outcome.notification is NotificationStatus.FAILED
    assert outcome.notification_failed is True
    assert len(bookings.rows) == 1


def test_unexpected_notifier_error_is_reported_as_failed(services, bookings) -> None:
    class Exploding:
        def send_booking_confirmation(self, *args) -> None:
            raise RuntimeError("boom")

    use_case = BookServiceUseCase(services=services, bookings=bookings, notifier=Exploding())

    assert use_case.execute(_request()).notification is NotificationStatus.FAILED


def test_booking_without_email_skips_notification(services, bookings) -> None:
    notifier = RecordingNotifier()
    use_case = BookServiceUseCase(services=services, bookings=bookings, notifier=notifier)

    outcome = use_case.execute(_request(client_email="  "))

    assert outcome.notification is NotificationStatus.SKIPPED
    assert outcome.booking.client_email is None
    assert notifier.sent == []


def test_background_executor_queues_notification(services, bookings) -> None:
    executor = InlineExecutor()
    notifier = RecordingNotifier(fail=True)
    use_case = BookServiceUseCase(
        services=services, bookings=bookings, notifier=notifier, executor=executor
    )

    outcome = use_case.execute(_request())

    assert outcome.notification is NotificationStatus.QUEUED
    assert executor.submitted == 1
    assert len(bookings.rows) == 1


def test_stopped_executor_reports_failed_and_keeps_booking(services, bookings) -> None:
    executor = ThreadPoolExecutor(max_workers=1)
    executor.shutdown()
    notifier = RecordingNotifier()
    use_case = BookServiceUseCase(
        services=services, bookings=bookings, notifier=notifier, executor=executor
    )

    outcome = use_case.execute(_request())

    assert outcome.state is BookingState.COMMITTED
    assert outcome.notification is NotificationStatus.FAILED
    assert len(bookings.rows) == 1
    assert notifier.sent == []


def test_slot_conflict_is_logged_as_rejected(services, bookings, log_messages) -> None:
    use_case = BookServiceUseCase(
        services=services, bookings=bookings, notifier=RecordingNotifier()
    )
    use_case.execute(_request())

    with pytest.raises(SlotTakenError):
        use_case.execute(_request(client_name="Bob"))

    assert any(
        message.startswith("booking: rejected at=slot_checked service_id=1 reason=slot_taken")
        for message in log_messages
    )


def test_unknown_service_is_rejected_after_validation(services, bookings, log_messages) -> None:
    use_case = BookServiceUseCase(
        services=services, bookings=bookings, notifier=RecordingNotifier()
    )

    with pytest.raises(NotFoundError):
        use_case.execute(_request(service_id=99))

    assert any(message.startswith("booking: rejected at=validated") for message in log_messages)
