# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    CLIENT = "client"
    PROVIDER = "provider"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:
    """Signed, time-boxed credential issued after a successful login."""

    token: str
    user_id: int
    role: Role
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: int
    role: Role
