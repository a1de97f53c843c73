# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from autoservice.application.use_cases.bookings.book_service import BookServiceUseCase
from autoservice.application.use_cases.users.verify_token import VerifyTokenUseCase
from autoservice.domain.bookings.entities import BookingRequest, NotificationStatus
from autoservice.domain.bookings.exceptions import SlotTakenError
from autoservice.domain.catalog.exceptions import ServiceNotFoundError
from autoservice.infrastructure.audit import AuditAction, audit_log
from autoservice.interfaces.http.auth import auth_required, authed_request, client_ip
from autoservice.interfaces.http.dto.bookings import BookingRequestDTO, BookingResponseDTO
from autoservice.shared.errors.validation import raise_validation_error

_MESSAGES = {
    NotificationStatus.SENT: "Booking confirmed and email sent",
    NotificationStatus.QUEUED: "Booking confirmed, email queued",
    NotificationStatus.SKIPPED: "Booking confirmed",
    NotificationStatus.FAILED: "Booking confirmed, but email failed",
}


class BookingsController:
    def __init__(
        self,
        *,
        book_use_case: BookServiceUseCase,
        verify_token_use_case: VerifyTokenUseCase,
    ) -> None:
        self._book_use_case = book_use_case
        self._verify_token_use_case = verify_token_use_case

    def as_blueprint(self) -> Blueprint:
        guard = auth_required(self._verify_token_use_case)
        bp = Blueprint("bookings", __name__, url_prefix="/api")
        bp.add_url_rule(
            "/services/<int:service_id>/book",
            view_func=guard(self.book),
            methods=["POST"],
        )
        return bp

    def book(self, service_id: int) -> tuple[Response, int]:
        try:
            dto = BookingRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = authed_request().user_id
        booking_request = BookingRequest(
            service_id=service_id,
            client_name=dto.client_name,
            client_email=dto.client_email,
            date=dto.date,
            time=dto.time,
            user_id=user_id,
        )

        try:
            outcome = self._book_use_case.execute(booking_request)
        except (SlotTakenError, ServiceNotFoundError) as exc:
            audit_log(
                AuditAction.BOOKING_REJECTED,
                user_id=user_id,
                ip_address=client_ip(),
                details={"service_id": service_id, "reason": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.BOOKING_CREATED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"service_id": service_id, "booking_id": outcome.booking.id},
        )

        payload: dict[str, object] = {
            "message": _MESSAGES[outcome.notification],
            "booking": BookingResponseDTO.model_validate(outcome.booking).model_dump(mode="json"),
            "notification": outcome.notification.value,
        }
        if outcome.notification_failed:
            payload["warning"] = "confirmation email could not be sent"
        return jsonify(payload), 201
