# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Reserve a slot and send the confirmation.

A request moves through ``received -> validated -> slot_checked ->
committed`` and then attempts one notification. Lookup failures and slot
conflicts end in ``rejected`` with nothing persisted. The notification
outcome never changes a committed booking.
"""

from __future__ import annotations

from concurrent.futures import Executor
from datetime import UTC, datetime
from time import perf_counter

from autoservice.application.interfaces import NotificationPort
from autoservice.domain.bookings.entities import (
    Booking,
    BookingOutcome,
    BookingRequest,
    BookingState,
    NotificationStatus,
    Slot,
)
from autoservice.domain.bookings.exceptions import NotificationError, SlotTakenError
from autoservice.domain.bookings.repositories import BookingRepository
from autoservice.domain.catalog.entities import Service
from autoservice.domain.catalog.exceptions import ServiceNotFoundError
from autoservice.domain.catalog.repositories import ServiceRepository
from autoservice.domain.exceptions import InvariantViolation
from autoservice.shared.errors.base import ValidationError
from autoservice.shared.errors.validation import missing_fields_error
from autoservice.shared.logging import logger


class BookServiceUseCase:
    def __init__(
        self,
        *,
        services: ServiceRepository,
        bookings: BookingRepository,
        notifier: NotificationPort,
        executor: Executor | None = None,
    ) -> None:
        self._services = services
        self._bookings = bookings
        self._notifier = notifier
        self._executor = executor

    def execute(self, request: BookingRequest) -> BookingOutcome:
        t0 = perf_counter()
        state = BookingState.RECEIVED
        logger.debug(f"booking: {state.value} service_id={request.service_id}")

        try:
            booking = self._validate(request)
            state = BookingState.VALIDATED

            service = self._services.find_by_id(request.service_id)
            if service is None:
                raise ServiceNotFoundError(request.service_id)

            # Conflict detection is the insert itself; the unique index on
            # (service_id, date, time) decides which concurrent caller wins.
            state = BookingState.SLOT_CHECKED
            committed = self._bookings.add(booking)
            state = BookingState.COMMITTED
        except (ValidationError, ServiceNotFoundError, SlotTakenError) as exc:
            rejected_at, state = state, BookingState.REJECTED
            logger.info(
                f"booking: {state.value} at={rejected_at.value} service_id={request.service_id} "
                f"reason={exc.code}"
            )
            raise

        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"booking: committed booking_id={committed.id} service_id={committed.service_id} "
            f"date={committed.date.isoformat()} time={committed.time.isoformat()} dt_ms={dt:.0f}"
        )

        notification = self._notify(committed, service)
        return BookingOutcome(booking=committed, state=state, notification=notification)

    @staticmethod
    def _validate(request: BookingRequest) -> Booking:
        fields = {
            "client_name": request.client_name,
            "date": request.date,
            "time": request.time,
        }
        missing = [
            name
            for name, value in fields.items()
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise missing_fields_error(*missing)

        try:
            slot = Slot(service_id=request.service_id, date=request.date, time=request.time)
            return Booking(
                id=0,
                slot=slot,
                client_name=str(request.client_name).strip(),
                client_email=(request.client_email or "").strip() or None,
                user_id=request.user_id,
                created_at=datetime.now(UTC),
            )
        except InvariantViolation as exc:
            field = exc.field or "booking"
            raise ValidationError(
                context={
                    "fields": [field],
                    "errors": [{"field": field, "type": "value_error", "msg": str(exc)}],
                }
            ) from exc

    def _notify(self, booking: Booking, service: Service) -> NotificationStatus:
        if not booking.client_email:
            logger.info(f"booking.notify: skipped booking_id={booking.id} (no client email)")
            return NotificationStatus.SKIPPED

        if self._executor is not None:
            try:
                self._executor.submit(self._deliver_quietly, booking, service)
            except RuntimeError as exc:
                # Executor already shut down
                logger.warning(f"booking.notify: not queued booking_id={booking.id} reason={exc}")
                return NotificationStatus.FAILED
            logger.debug(f"booking.notify: queued booking_id={booking.id}")
            return NotificationStatus.QUEUED

        try:
            self._deliver(booking, service)
        except NotificationError as exc:
            logger.warning(
                f"booking.notify: failed booking_id={booking.id} reason={exc.context or exc.code}"
            )
            return NotificationStatus.FAILED
        except Exception:
            logger.exception(f"booking.notify: unexpected failure booking_id={booking.id}")
            return NotificationStatus.FAILED
        return NotificationStatus.SENT

    def _deliver(self, booking: Booking, service: Service) -> None:
        self._notifier.send_booking_confirmation(
            booking.client_email or "",
            booking.client_name,
            service.name,
            booking.date,
            booking.time,
        )
        logger.info(f"booking.notify: sent booking_id={booking.id}")

    def _deliver_quietly(self, booking: Booking, service: Service) -> None:
        try:
            self._deliver(booking, service)
        except NotificationError as exc:
            logger.warning(
                f"booking.notify: failed booking_id={booking.id} reason={exc.context or exc.code}"
            )
        except Exception:
            logger.exception(f"booking.notify: unexpected failure booking_id={booking.id}")
