# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date, time
from http import HTTPStatus

from autoservice.shared.errors.base import DomainError


class SlotTakenError(DomainError):
    code = "slot_taken"
    status = HTTPStatus.CONFLICT

    def __init__(self, service_id: int, day: date, at: time) -> None:
        super().__init__(
            context={"service_id": service_id, "date": day.isoformat(), "time": at.isoformat()}
        )


class NotificationError(DomainError):
    code = "notification_failed"
    status = HTTPStatus.BAD_GATEWAY

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(context={"reason": reason} if reason else None)
