from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from flask import Flask

from autoservice.application.use_cases.bookings.book_service import BookServiceUseCase
from autoservice.domain.catalog.entities import Service
from autoservice.domain.users.entities import Role, TokenClaims
from autoservice.domain.users.exceptions import MissingTokenError
from autoservice.interfaces.http.controllers.bookings_controller import BookingsController
from autoservice.shared.middleware.error_handler import configure_error_handling

from .fakes import InMemoryBookingRepository, InMemoryServiceRepository, RecordingNotifier

AUTH = {"Authorization": "Bearer valid"}


class StubVerify:
    def execute(self, token: str | None) -> TokenClaims:
        if not token:
            raise MissingTokenError()
        return TokenClaims(user_id=5, role=Role.CLIENT)


@pytest.fixture()
def bookings() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


def _app(bookings: InMemoryBookingRepository, notifier: RecordingNotifier) -> Flask:
    services = InMemoryServiceRepository()
    services.add(
        Service(
            id=0,
            name="Oil change",
            location="London",
            contact_info=None,
            hourly_rate=Decimal("40"),
        )
    )
    controller = BookingsController(
        book_use_case=BookServiceUseCase(
            services=services, bookings=bookings, notifier=notifier
        ),
        verify_token_use_case=StubVerify(),
    )
    app = Flask(__name__)
    configure_error_handling(app)
    app.register_blueprint(controller.as_blueprint())
    return app


BODY = {
    "client_name": "Ann",
    "client_email": "ann@example.com",
    "date": "2024-05-01",
    "time": "10:00",
}


def test_book_requires_token(bookings) -> None:
    app = _app(bookings, RecordingNotifier())

    with app.test_client() as client:
        response = client.post("/api/services/1/book", json=BODY)

    assert response.status_code == 401
    assert response.get_json() == {"error": "missing_token"}
    assert bookings.rows == []


def test_book_success(bookings) -> None:
    notifier = RecordingNotifier()
    app = _app(bookings, notifier)

    with app.test_client() as client:
        response = client.post("/api/services/1/book", json=BODY, headers=AUTH)

    assert response.status_code == 201
    payload = response.get_json()
    assert payload["notification"] == "sent"
    assert payload["message"] == "Booking confirmed and email sent"
    assert payload["booking"]["service_id"] == 1
    assert payload["booking"]["user_id"] == 5
    assert payload["booking"]["date"] == "2024-05-01"
    assert payload["booking"]["time"] == "10:00"
    assert notifier.sent[0][3:] == (date(2024, 5, 1), time(10, 0))


def test_same_slot_with_seconds_conflicts(bookings) -> None:
    app = _app(bookings, RecordingNotifier())

    with app.test_client() as client:
        first = client.post("/api/services/1/book", json=BODY, headers=AUTH)
        second = client.post(
            "/api/services/1/book",
            json={**BODY, "client_name": "Bob", "time": "10:00:00"},
            headers=AUTH,
        )

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.get_json()["error"] == "slot_taken"
    assert len(bookings.rows) == 1


def test_booking_time_with_seconds_is_returned_in_full(bookings) -> None:
    notifier = RecordingNotifier()
    app = _app(bookings, notifier)

    with app.test_client() as client:
        response = client.post(
            "/api/services/1/book", json={**BODY, "time": "10:00:30"}, headers=AUTH
        )

    assert response.status_code == 201
    assert response.get_json()["booking"]["time"] == "10:00:30"
    assert notifier.sent[0][4] == time(10, 0, 30)


def test_unknown_service_returns_404(bookings) -> None:
    app = _app(bookings, RecordingNotifier())

    with app.test_client() as client:
        response = client.post("/api/services/99/book", json=BODY, headers=AUTH)

    assert response.status_code == 404
    assert bookings.rows == []


def test_missing_fields_return_422(bookings) -> None:
    app = _app(bookings, RecordingNotifier())

    with app.test_client() as client:
        response = client.post(
            "/api/services/1/book", json={"client_name": "Ann"}, headers=AUTH
        )

    assert response.status_code == 422
    assert response.get_json()["context"]["fields"] == ["date", "time"]


def test_email_failure_still_confirms_booking(bookings) -> None:
    app = _app(bookings, RecordingNotifier(fail=True))

    with app.test_client() as client:
        response = client.post("/api/services/1/book", json=BODY, headers=AUTH)

    assert response.status_code == 201
    payload = response.get_json()
    assert payload["notification"] == "failed"
    assert payload["message"] == "Booking confirmed, but email failed"
    assert "warning" in payload
    assert len(bookings.rows) == 1


def test_unexpected_error_is_internal(bookings) -> None:
    book = MagicMock()
    book.execute.side_effect = RuntimeError("boom")
    app = Flask(__name__)
    configure_error_handling(app)
    app.register_blueprint(
        BookingsController(book_use_case=book, verify_token_use_case=StubVerify()).as_blueprint()
    )

    with app.test_client() as client:
        response = client.post("/api/services/1/book", json=BODY, headers=AUTH)

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}
