# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from autoservice.shared.errors.base import DomainError


class DuplicateUserError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT


# Unknown email and wrong password share this error on purpose, so that
# callers cannot probe which accounts exist.
class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class MissingTokenError(DomainError):
    code = "missing_token"
    status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.FORBIDDEN
