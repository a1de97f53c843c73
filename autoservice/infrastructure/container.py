# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from autoservice.application.interfaces import MailTransport
from autoservice.application.services.password_hashing import WerkzeugPasswordHasher
from autoservice.application.services.token_signer import JoseTokenSigner
from autoservice.application.use_cases.bookings.book_service import BookServiceUseCase
from autoservice.application.use_cases.catalog.create_service import CreateServiceUseCase
from autoservice.application.use_cases.catalog.get_service import GetServiceUseCase
from autoservice.application.use_cases.catalog.list_services import ListServicesUseCase
from autoservice.application.use_cases.users.login_user import LoginUserUseCase
from autoservice.application.use_cases.users.register_user import RegisterUserUseCase
from autoservice.application.use_cases.users.verify_token import VerifyTokenUseCase
from autoservice.infrastructure.db import create_db_engine, create_session_factory, init_db
from autoservice.infrastructure.mail import EmailNotificationAdapter, build_mail_transport
from autoservice.infrastructure.repositories.sqlalchemy import (
    SqlAlchemyBookingRepository,
    SqlAlchemyServiceRepository,
)
from autoservice.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from autoservice.interfaces.http.controllers.auth_controller import AuthController
from autoservice.interfaces.http.controllers.bookings_controller import BookingsController
from autoservice.interfaces.http.controllers.catalog_controller import CatalogController
from autoservice.interfaces.http.controllers.misc_controller import MiscController
from autoservice.shared.config import AppConfig
from autoservice.shared.logging import logger


class Container:
    """Wires every component from one explicit configuration object."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    # Storage

    @cached_property
    def engine(self) -> Engine:
        engine = create_db_engine(self.config.database)
        init_db(engine)
        return engine

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def service_repository(self) -> SqlAlchemyServiceRepository:
        return SqlAlchemyServiceRepository(self.session_factory)

    @cached_property
    def booking_repository(self) -> SqlAlchemyBookingRepository:
        return SqlAlchemyBookingRepository(self.session_factory)

    # Security

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def token_signer(self) -> JoseTokenSigner:
        security = self.config.security
        return JoseTokenSigner(
            security.jwt_secret,
            algorithm=security.jwt_algorithm,
            ttl_seconds=security.access_token_ttl,
        )

    # Mail

    @cached_property
    def mail_transport(self) -> MailTransport:
        return build_mail_transport(self.config.mail)

    @cached_property
    def notification_port(self) -> EmailNotificationAdapter:
        return EmailNotificationAdapter(
            transport=self.mail_transport, sender=self.config.mail.sender
        )

    @cached_property
    def mail_executor(self) -> ThreadPoolExecutor | None:
        mail = self.config.mail
        if not mail.send_in_background:
            return None
        return ThreadPoolExecutor(
            max_workers=mail.background_workers, thread_name_prefix="mail"
        )

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_signer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def verify_token_use_case(self) -> VerifyTokenUseCase:
        return VerifyTokenUseCase(tokens=self.token_signer)

    @cached_property
    def list_services_use_case(self) -> ListServicesUseCase:
        return ListServicesUseCase(services=self.service_repository)

    @cached_property
    def create_service_use_case(self) -> CreateServiceUseCase:
        return CreateServiceUseCase(services=self.service_repository)

    @cached_property
    def get_service_use_case(self) -> GetServiceUseCase:
        return GetServiceUseCase(services=self.service_repository)

    @cached_property
    def book_service_use_case(self) -> BookServiceUseCase:
        return BookServiceUseCase(
            services=self.service_repository,
            bookings=self.booking_repository,
            notifier=self.notification_port,
            executor=self.mail_executor,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            verify_token_use_case=self.verify_token_use_case,
        )

    @cached_property
    def catalog_controller(self) -> CatalogController:
        return CatalogController(
            list_use_case=self.list_services_use_case,
            create_use_case=self.create_service_use_case,
            get_use_case=self.get_service_use_case,
        )

    @cached_property
    def bookings_controller(self) -> BookingsController:
        return BookingsController(
            book_use_case=self.book_service_use_case,
            verify_token_use_case=self.verify_token_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)

    def shutdown(self) -> None:
        """Drain queued mail and release pooled connections."""

        executor = self.__dict__.get("mail_executor")
        if executor is not None:
            executor.shutdown(wait=True)
        engine = self.__dict__.get("engine")
        if engine is not None:
            engine.dispose()
        logger.info("container: shut down")
