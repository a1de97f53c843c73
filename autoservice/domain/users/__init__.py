# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Role, SessionToken, TokenClaims, User
from .exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)

__all__ = [
    "DuplicateUserError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "Role",
    "SessionToken",
    "TokenClaims",
    "User",
]
