# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from zkserver.domain.users.repositories import UserRepository
from zkserver.shared.logging import logger


class ConfirmRegistrationUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, name: str, key: str) -> bool:
        """True when ``key`` was the user's pending registration key, now consumed.

        Storage failures propagate as StorageError.
        """
        if not name or not key:
            return False
        if self._users.find_by_name(name) is None:
            logger.info("auth.confirm: unknown user")
            return False
        if not self._users.clear_registration_key(name, key):
            logger.info(f"auth.confirm: key mismatch for {name}")
            return False
        logger.info(f"auth.confirm: registered {name}")
        return True
