"""Use-case for checking bearer tokens."""

from __future__ import annotations

from autoservice.domain.users.entities import TokenClaims
from autoservice.domain.users.repositories import TokenSigner


class VerifyTokenUseCase:
    def __init__(self, *, tokens: TokenSigner) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> TokenClaims:
        return self._tokens.verify(token)
