# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from autoservice.domain.catalog.entities import Service, ServiceFilter
from autoservice.domain.catalog.repositories import ServiceRepository
from autoservice.domain.exceptions import InvariantViolation
from autoservice.shared.errors.base import ValidationError


def _invalid(field: str, message: str) -> ValidationError:
    return ValidationError(
        context={"fields": [field], "errors": [{"field": field, "type": "value_error", "msg": message}]}
    )


class ListServicesUseCase:
    def __init__(self, *, services: ServiceRepository) -> None:
        self._services = services

    def execute(
        self,
        *,
        location: str | None = None,
        max_rate: Decimal | float | str | None = None,
        available_day: str | None = None,
    ) -> list[Service]:
        rate: Decimal | None = None
        if max_rate is not None and str(max_rate).strip():
            try:
                rate = Decimal(str(max_rate).strip())
            except InvalidOperation as exc:
                raise _invalid("max_rate", "must be a number") from exc
            if not rate.is_finite():
                raise _invalid("max_rate", "must be a finite number")

        try:
            criteria = ServiceFilter(
                location=location,
                max_rate=rate,
                available_day=(available_day or None),
            )
        except InvariantViolation as exc:
            raise _invalid(exc.field or "filter", str(exc)) from exc

        return list(self._services.search(criteria))
