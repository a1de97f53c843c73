"""JWT issuance and verification."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from autoservice.domain.users.entities import Role, SessionToken, TokenClaims, User
from autoservice.domain.users.exceptions import InvalidTokenError, MissingTokenError
from autoservice.domain.users.repositories import TokenSigner


def _utc_now() -> datetime:
    return datetime.now(UTC)


class JoseTokenSigner(TokenSigner):
    """HMAC-signed access tokens carrying the user id and role.

    Expiry is checked against the injected clock rather than by the JWT
    library so that token lifetimes can be exercised deterministically.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def issue(self, user: User) -> SessionToken:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        claims = {
            "sub": str(user.id),
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return SessionToken(
            token=token,
            user_id=user.id,
            role=user.role,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def verify(self, token: str | None) -> TokenClaims:
        if not token or not token.strip():
            raise MissingTokenError()
        try:
            claims = jwt.decode(
                token.strip(),
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError() from exc

        try:
            expires_at = int(claims["exp"])
            user_id = int(claims["sub"])
            role = Role(claims["role"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc

        if self._clock().timestamp() > expires_at:
            raise InvalidTokenError()
        return TokenClaims(user_id=user_id, role=role)
