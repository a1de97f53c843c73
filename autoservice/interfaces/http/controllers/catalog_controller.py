# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from autoservice.application.use_cases.catalog.create_service import CreateServiceUseCase
from autoservice.application.use_cases.catalog.get_service import GetServiceUseCase
from autoservice.application.use_cases.catalog.list_services import ListServicesUseCase
from autoservice.infrastructure.audit import AuditAction, audit_log
from autoservice.interfaces.http.auth import client_ip
from autoservice.interfaces.http.dto.catalog import (
    ServiceCreateDTO,
    ServiceQueryDTO,
    ServiceResponseDTO,
)
from autoservice.shared.errors.validation import raise_validation_error
from autoservice.shared.logging import logger


def _serialize(service) -> dict:
    return ServiceResponseDTO.model_validate(service).model_dump(mode="json")


class CatalogController:
    def __init__(
        self,
        *,
        list_use_case: ListServicesUseCase,
        create_use_case: CreateServiceUseCase,
        get_use_case: GetServiceUseCase,
    ) -> None:
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._get_use_case = get_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("catalog", __name__, url_prefix="/api")
        bp.add_url_rule("/services", view_func=self.list_services, methods=["GET"])
        bp.add_url_rule("/services", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/services/<int:service_id>", view_func=self.get, methods=["GET"])
        return bp

    def list_services(self) -> tuple[Response, int]:
        t0 = perf_counter()
        query = ServiceQueryDTO.model_validate(request.args.to_dict())
        services = self._list_use_case.execute(
            location=query.location,
            max_rate=query.max_rate,
            available_day=query.available_day,
        )
        dt = (perf_counter() - t0) * 1000
        logger.info(f"catalog.list: ok (n={len(services)}, dt_ms={dt:.0f})")
        return jsonify([_serialize(service) for service in services]), 200

    def create(self) -> tuple[Response, int]:
        try:
            dto = ServiceCreateDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        service = self._create_use_case.execute(
            name=dto.name,
            location=dto.location,
            contact_info=dto.contact_info,
            hourly_rate=dto.hourly_rate,
            available_slots=dto.available_slots,
        )
        audit_log(
            AuditAction.SERVICE_CREATED,
            ip_address=client_ip(),
            details={"service_id": service.id, "name": service.name},
        )
        return jsonify(_serialize(service)), 201

    def get(self, service_id: int) -> tuple[Response, int]:
        service = self._get_use_case.execute(service_id)
        return jsonify(_serialize(service)), 200
