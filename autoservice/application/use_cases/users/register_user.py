# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from autoservice.domain.users.entities import Role, User
from autoservice.domain.users.repositories import PasswordHasher, UserRepository
from autoservice.shared.errors.base import ValidationError
from autoservice.shared.errors.validation import missing_fields_error
from autoservice.shared.logging import logger


def _blank(value: object) -> bool:
    return value is None or not str(value).strip()


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
        role: str | Role | None,
    ) -> User:
        fields = {"username": username, "email": email, "password": password, "role": role}
        missing = [name for name, value in fields.items() if _blank(value)]
        if missing:
            raise missing_fields_error(*missing)

        try:
            resolved_role = Role(str(getattr(role, "value", role)).strip().lower())
        except ValueError as exc:
            raise ValidationError(
                context={
                    "fields": ["role"],
                    "errors": [{"field": "role", "type": "enum", "ctx": {"allowed": [r.value for r in Role]}}],
                }
            ) from exc

        hashed = self._password_hasher.hash(str(password))
        user = User(
            id=0,
            username=str(username).strip(),
            email=str(email).strip().lower(),
            password_hash=hashed,
            role=resolved_role,
            created_at=datetime.now(UTC),
        )
        # The repository surfaces unique violations on username/email as
        # DuplicateUserError.
        persisted = self._users.add(user)
        logger.info(f"auth.register: ok user_id={persisted.id} role={persisted.role.value}")
        return persisted
