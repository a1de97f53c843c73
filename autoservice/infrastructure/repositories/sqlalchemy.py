# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from autoservice.domain.bookings.entities import Booking as DomainBooking
from autoservice.domain.bookings.entities import Slot
from autoservice.domain.bookings.exceptions import SlotTakenError
from autoservice.domain.bookings.repositories import BookingRepository
from autoservice.domain.catalog.entities import Service as DomainService
from autoservice.domain.catalog.entities import ServiceFilter
from autoservice.domain.catalog.exceptions import ServiceNotFoundError
from autoservice.domain.catalog.repositories import ServiceRepository
from autoservice.infrastructure.db.models import Booking, Service
from autoservice.infrastructure.unit_of_work import unit_of_work_scope
from autoservice.shared.errors.base import StoreError
from autoservice.shared.logging import logger


def _service_to_domain(row: Service) -> DomainService:
    return DomainService(
        id=row.id,
        name=row.name,
        location=row.location,
        contact_info=row.contact_info,
        hourly_rate=row.hourly_rate,
        available_slots=dict(row.available_slots or {}),
    )


def _booking_to_domain(row: Booking) -> DomainBooking:
    return DomainBooking(
        id=row.id,
        slot=Slot(service_id=row.service_id, date=row.date, time=row.time),
        client_name=row.client_name,
        client_email=row.client_email,
        user_id=row.user_id,
        created_at=row.created_at,
    )


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    return "foreign key" in str(exc.orig).lower()


class SqlAlchemyServiceRepository(ServiceRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def search(self, criteria: ServiceFilter) -> Sequence[DomainService]:
        stmt = select(Service)
        if criteria.location:
            stmt = stmt.where(Service.location.icontains(criteria.location, autoescape=True))
        if criteria.max_rate is not None:
            stmt = stmt.where(Service.hourly_rate <= criteria.max_rate)
        if criteria.available_day:
            # JSON null and a missing key both extract to SQL NULL
            stmt = stmt.where(
                Service.available_slots[criteria.available_day].as_string().is_not(None)
            )
        stmt = stmt.order_by(Service.id.asc())

        try:
            with unit_of_work_scope(self._session_factory) as session:
                rows = session.scalars(stmt).all()
                return [_service_to_domain(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.error(f"services: search failed ({type(exc).__name__})")
            raise StoreError() from exc

    def find_by_id(self, service_id: int) -> DomainService | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(Service, service_id)
                return _service_to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"services: lookup failed ({type(exc).__name__})")
            raise StoreError() from exc

    def add(self, service: DomainService) -> DomainService:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = Service(
                    name=service.name,
                    location=service.location,
                    contact_info=service.contact_info,
                    hourly_rate=service.hourly_rate,
                    available_slots=dict(service.available_slots),
                )
                session.add(row)
                session.flush()
                created = _service_to_domain(row)
        except SQLAlchemyError as exc:
            logger.error(f"services: insert failed ({type(exc).__name__})")
            raise StoreError() from exc
        return created


class SqlAlchemyBookingRepository(BookingRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, booking: DomainBooking) -> DomainBooking:
        """Insert the booking; the slot unique constraint rejects a second claim."""

        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = Booking(
                    service_id=booking.service_id,
                    client_name=booking.client_name,
                    client_email=booking.client_email,
                    date=booking.date,
                    time=booking.time,
                    user_id=booking.user_id,
                    created_at=booking.created_at,
                )
                session.add(row)
                session.flush()
                created = _booking_to_domain(row)
        except IntegrityError as exc:
            if _is_foreign_key_violation(exc):
                raise ServiceNotFoundError(booking.service_id) from exc
            raise SlotTakenError(booking.service_id, booking.date, booking.time) from exc
        except SQLAlchemyError as exc:
            logger.error(f"bookings: insert failed ({type(exc).__name__})")
            raise StoreError() from exc
        return created

    def count_for_slot(self, slot: Slot) -> int:
        stmt = (
            select(func.count(Booking.id))
            .where(Booking.service_id == slot.service_id)
            .where(Booking.date == slot.date)
            .where(Booking.time == slot.time)
        )
        try:
            with unit_of_work_scope(self._session_factory) as session:
                return int(session.scalar(stmt) or 0)
        except SQLAlchemyError as exc:
            logger.error(f"bookings: count failed ({type(exc).__name__})")
            raise StoreError() from exc
