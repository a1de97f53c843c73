# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from autoservice.shared.errors.base import DomainError


class ServiceNotFoundError(DomainError):
    code = "service_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, service_id: int) -> None:
        super().__init__(context={"service_id": service_id})


NotFoundError = ServiceNotFoundError
