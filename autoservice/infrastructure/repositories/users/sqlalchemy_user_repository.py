# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from autoservice.domain.users.entities import Role
from autoservice.domain.users.entities import User as DomainUser
from autoservice.domain.users.exceptions import DuplicateUserError
from autoservice.domain.users.repositories import UserRepository
from autoservice.infrastructure.db.models import User
from autoservice.infrastructure.unit_of_work import unit_of_work_scope
from autoservice.shared.errors.base import StoreError
from autoservice.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        role=Role(row.role),
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.query(User).filter(User.email == email.lower()).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users: lookup by email failed ({type(exc).__name__})")
            raise StoreError() from exc

    def find_by_id(self, user_id: int) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users: lookup by id failed ({type(exc).__name__})")
            raise StoreError() from exc

    def add(self, user: DomainUser) -> DomainUser:
        # The unique indexes on username and email are the source of truth;
        # a concurrent registration surfaces here as an IntegrityError.
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    email=user.email.lower(),
                    password_hash=user.password_hash,
                    role=user.role.value,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                created = _to_domain(row)
        except IntegrityError as exc:
            raise DuplicateUserError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users: insert failed ({type(exc).__name__})")
            raise StoreError() from exc
        return created
