# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps
from typing import cast

from flask import Request, g, request

from autoservice.application.use_cases.users.verify_token import VerifyTokenUseCase
from autoservice.domain.users.entities import Role
from autoservice.domain.users.exceptions import InvalidTokenError, MissingTokenError
from autoservice.infrastructure.audit import AuditAction, audit_log
from autoservice.shared.logging import logger


class AuthedRequest(Request):
    user_id: int
    role: Role


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def bearer_token() -> str | None:
    auth = request.headers.get("Authorization", "")
    scheme, _, value = auth.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return value.strip() or None


def auth_required(verify: VerifyTokenUseCase):
    """Guard a view with a bearer token; claims land on ``g`` and the request."""

    def decorator(f):
        @wraps(f)
        def inner(*a, **kw):
            token = bearer_token()
            try:
                claims = verify.execute(token)
            except MissingTokenError:
                logger.warning(
                    f"No bearer token on {request.method} {request.path} from {client_ip()}"
                )
                raise
            except InvalidTokenError:
                audit_log(
                    AuditAction.TOKEN_REJECTED,
                    ip_address=client_ip(),
                    details={"path": request.path},
                    success=False,
                )
                raise

            g.user_id = claims.user_id
            g.role = claims.role
            request.user_id = claims.user_id
            request.role = claims.role
            logger.debug(f"Auth OK: user={claims.user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    return decorator
