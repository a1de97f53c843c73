# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import MailTransport, NotificationPort
from .use_cases.bookings.book_service import BookServiceUseCase
from .use_cases.catalog.create_service import CreateServiceUseCase
from .use_cases.catalog.get_service import GetServiceUseCase
from .use_cases.catalog.list_services import ListServicesUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.verify_token import VerifyTokenUseCase

__all__ = [
    "BookServiceUseCase",
    "CreateServiceUseCase",
    "GetServiceUseCase",
    "ListServicesUseCase",
    "LoginUserUseCase",
    "MailTransport",
    "NotificationPort",
    "RegisterUserUseCase",
    "VerifyTokenUseCase",
]
