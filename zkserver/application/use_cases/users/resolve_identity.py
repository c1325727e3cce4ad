# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Any

from zkserver.domain.users.entities import LoginProfile
from zkserver.domain.users.repositories import SessionTokenRepository, UserRepository
from zkserver.shared.logging import logger


class ResolveIdentityUseCase:
    """Map a session token to the logged-in user, or ``None`` for anonymous.

    Never raises: a missing, malformed, expired or unknown token and a failing
    store all mean "anonymous" for the current request.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenRepository,
        lifetime: timedelta,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._lifetime = lifetime

    def execute(self, token: Any) -> LoginProfile | None:
        if not isinstance(token, str) or not token:
            return None
        try:
            user_id = self._tokens.find_user_id(token, self._lifetime)
            if user_id is None:
                return None
            user = self._users.find_by_id(user_id)
        except Exception:
            logger.exception("auth.identity: lookup failed, treating request as anonymous")
            return None
        if user is None or not user.is_registered:
            return None
        return LoginProfile.for_user(user)
