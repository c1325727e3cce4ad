"""Use-case for revoking session tokens."""

from __future__ import annotations

from zkserver.domain.users.repositories import SessionTokenRepository


class LogoutUserUseCase:
    def __init__(self, *, tokens: SessionTokenRepository) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> None:
        if token:
            self._tokens.revoke(token)
