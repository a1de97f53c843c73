# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from autoservice.domain.users.entities import SessionToken
from autoservice.domain.users.exceptions import InvalidCredentialsError
from autoservice.domain.users.repositories import PasswordHasher, TokenSigner, UserRepository
from autoservice.shared.errors.validation import missing_fields_error
from autoservice.shared.logging import logger

_DUMMY_PASSWORD = "autoservice-timing-equaliser"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenSigner,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._dummy_hash: str | None = None

    def _equalise_timing(self, password: str) -> None:
        # Spend one hash verification even when the email is unknown.
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(_DUMMY_PASSWORD)
        self._password_hasher.verify(password, self._dummy_hash)

    def execute(self, email: str | None, password: str | None) -> SessionToken:
        missing = [
            name for name, value in (("email", email), ("password", password)) if not value
        ]
        if missing:
            raise missing_fields_error(*missing)

        user = self._users.find_by_email(str(email).strip().lower())
        if user is None:
            self._equalise_timing(str(password))
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(str(password), user.password_hash):
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user)
        logger.info(
            f"auth.login: ok user_id={user.id} expires_at={token.expires_at.isoformat()}"
        )
        return token
