# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from zkserver.domain.users.repositories import SessionTokenRepository
from zkserver.shared.logging import logger


class PurgeExpiredTokensUseCase:
    def __init__(self, *, tokens: SessionTokenRepository, lifetime: timedelta) -> None:
        self._tokens = tokens
        self._lifetime = lifetime

    def execute(self) -> int:
        deleted = self._tokens.purge_expired(self._lifetime)
        logger.info(f"tokens.purge: deleted {deleted} expired token(s)")
        return deleted
