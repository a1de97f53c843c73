# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date, time
from typing import Protocol


class NotificationPort(Protocol):
    """Best-effort confirmation channel; raises NotificationError on failure."""

    def send_booking_confirmation(
        self,
        to: str,
        client_name: str,
        service_name: str,
        day: date,
        at: time,
    ) -> None: ...


class MailTransport(Protocol):
    def send(self, sender: str, to: str, subject: str, body: str) -> None: ...
