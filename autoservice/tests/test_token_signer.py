from __future__ import annotations

import base64
import json
from datetime import UTC, datetime, timedelta

import pytest

from autoservice.application.services.token_signer import JoseTokenSigner
from autoservice.domain.users.entities import Role, User
from autoservice.domain.users.exceptions import InvalidTokenError, MissingTokenError

ISSUED = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _user(role: Role = Role.CLIENT) -> User:
    return User(
        id=42,
        username="alice",
        email="alice@example.com",
        password_hash="x",
        role=role,
        created_at=ISSUED,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(ISSUED)


@pytest.fixture()
def signer(clock: FakeClock) -> JoseTokenSigner:
    return JoseTokenSigner("test-secret", clock=clock)


def test_issue_embeds_user_and_role(signer: JoseTokenSigner) -> None:
    session = signer.issue(_user(Role.PROVIDER))

    assert session.user_id == 42
    assert session.role is Role.PROVIDER
    assert session.expires_at - session.issued_at == timedelta(hours=1)

    claims = signer.verify(session.token)
    assert claims.user_id == 42
    assert claims.role is Role.PROVIDER


def test_token_valid_until_one_hour(signer: JoseTokenSigner, clock: FakeClock) -> None:
    token = signer.issue(_user()).token

    clock.now = ISSUED + timedelta(minutes=59)
    assert signer.verify(token).user_id == 42

    clock.now = ISSUED + timedelta(minutes=61)
    with pytest.raises(InvalidTokenError):
        signer.verify(token)


def test_tampered_payload_is_rejected(signer: JoseTokenSigner) -> None:
    header, payload, signature = signer.issue(_user()).token.split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    claims["role"] = Role.PROVIDER.value
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()

    with pytest.raises(InvalidTokenError):
        signer.verify(f"{header}.{forged}.{signature}")


def test_token_signed_with_other_secret_is_rejected(clock: FakeClock) -> None:
    other = JoseTokenSigner("another-secret", clock=clock)
    token = other.issue(_user()).token

    with pytest.raises(InvalidTokenError):
        JoseTokenSigner("test-secret", clock=clock).verify(token)


@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token(signer: JoseTokenSigner, token: str | None) -> None:
    with pytest.raises(MissingTokenError):
        signer.verify(token)


def test_malformed_token(signer: JoseTokenSigner) -> None:
    with pytest.raises(InvalidTokenError):
        signer.verify("not-a-jwt")
