# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from autoservice.application.use_cases.users.login_user import LoginUserUseCase
from autoservice.application.use_cases.users.register_user import RegisterUserUseCase
from autoservice.application.use_cases.users.verify_token import VerifyTokenUseCase
from autoservice.domain.users.exceptions import InvalidCredentialsError
from autoservice.infrastructure.audit import AuditAction, audit_log
from autoservice.interfaces.http.auth import auth_required, authed_request, client_ip
from autoservice.interfaces.http.dto.auth import (
    ClaimsResponseDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    TokenResponseDTO,
    UserResponseDTO,
)
from autoservice.shared.errors.validation import raise_validation_error
from autoservice.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        verify_token_use_case: VerifyTokenUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._verify_token_use_case = verify_token_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.username, dto.email, dto.password, dto.role)

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=client_ip(),
            details={"username": user.username, "role": user.role.value},
            success=True,
        )

        payload = {
            "message": "User registered successfully",
            "user": UserResponseDTO.model_validate(user).model_dump(mode="json"),
        }
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()

        try:
            session = self._login_use_case.execute(dto.email, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"email": dto.email},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=session.user_id,
            ip_address=ip_address,
            success=True,
        )

        payload = TokenResponseDTO(token=session.token, expires_at=session.expires_at)
        logger.info(f"auth.login: ok user_id={session.user_id}")
        return jsonify(payload.model_dump(mode="json")), 200

    def me(self) -> tuple[Response, int]:
        authed = authed_request()
        payload = ClaimsResponseDTO(user_id=authed.user_id, role=authed.role)
        return jsonify(payload.model_dump(mode="json")), 200

    def as_blueprint(self) -> Blueprint:
        guard = auth_required(self._verify_token_use_case)
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=guard(self.me), methods=["GET"])
        return bp
