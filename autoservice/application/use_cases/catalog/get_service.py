from __future__ import annotations

from autoservice.domain.catalog.entities import Service
from autoservice.domain.catalog.exceptions import ServiceNotFoundError
from autoservice.domain.catalog.repositories import ServiceRepository


class GetServiceUseCase:
    def __init__(self, *, services: ServiceRepository) -> None:
        self._services = services

    def execute(self, service_id: int) -> Service:
        service = self._services.find_by_id(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        return service
