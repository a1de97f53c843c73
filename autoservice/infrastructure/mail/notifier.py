# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date, time

from autoservice.application.interfaces import MailTransport, NotificationPort
from autoservice.domain.bookings.entities import format_slot_time
from autoservice.domain.bookings.exceptions import NotificationError

SUBJECT = "Booking Confirmation"

_BODY = (
    "Dear {client_name},\n\n"
    "Your booking for {service_name} on {day} at {at} has been confirmed.\n\n"
    "Thank you for choosing our service!"
)


def render_confirmation(client_name: str, service_name: str, day: date, at: time) -> str:
    return _BODY.format(
        client_name=client_name,
        service_name=service_name,
        day=day.isoformat(),
        at=format_slot_time(at),
    )


class EmailNotificationAdapter(NotificationPort):
    def __init__(self, *, transport: MailTransport, sender: str):
        self._transport = transport
        self._sender = sender

    def send_booking_confirmation(
        self,
        to: str,
        client_name: str,
        service_name: str,
        day: date,
        at: time,
    ) -> None:
        if not to:
            raise NotificationError("missing recipient")
        try:
            self._transport.send(
                self._sender, to, SUBJECT, render_confirmation(client_name, service_name, day, at)
            )
        except NotificationError:
            raise
        except Exception as exc:
            raise NotificationError(type(exc).__name__) from exc
