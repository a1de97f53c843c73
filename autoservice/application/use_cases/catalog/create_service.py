# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from autoservice.domain.catalog.entities import Service
from autoservice.domain.catalog.repositories import ServiceRepository
from autoservice.domain.exceptions import InvariantViolation
from autoservice.shared.errors.base import ValidationError
from autoservice.shared.logging import logger


class CreateServiceUseCase:
    def __init__(self, *, services: ServiceRepository) -> None:
        self._services = services

    def execute(
        self,
        *,
        name: str,
        location: str,
        contact_info: str | None,
        hourly_rate: Decimal | float,
        available_slots: Mapping[str, Any] | None = None,
    ) -> Service:
        try:
            service = Service(
                id=0,
                name=name,
                location=location,
                contact_info=contact_info,
                hourly_rate=Decimal(str(hourly_rate)),
                available_slots=dict(available_slots or {}),
            )
        except InvariantViolation as exc:
            field = exc.field or "service"
            raise ValidationError(
                context={
                    "fields": [field],
                    "errors": [{"field": field, "type": "value_error", "msg": str(exc)}],
                }
            ) from exc

        persisted = self._services.add(service)
        logger.info(f"catalog.create: ok service_id={persisted.id}")
        return persisted
