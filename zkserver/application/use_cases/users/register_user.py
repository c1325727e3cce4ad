# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import UTC, datetime
from urllib.parse import quote

from zkserver.domain.users.entities import User
from zkserver.domain.users.exceptions import UserAlreadyExistsError
from zkserver.domain.users.repositories import PasswordHasher, RegistrationMailer, UserRepository
from zkserver.shared.logging import logger


def registration_link(mainsite: str, name: str, key: str) -> str:
    return f"{mainsite.rstrip('/')}/register/{quote(name, safe='')}/{key}"


class RegisterUserUseCase:
    """Create an inactive account and mail out its one-time activation link."""

    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        mailer: RegistrationMailer,
        mainsite: str,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._mailer = mailer
        self._mainsite = mainsite

    def execute(self, name: str, password: str, email: str) -> User:
        if self._users.find_by_name(name):
            raise UserAlreadyExistsError()
        key = secrets.token_urlsafe(24)
        user = User(
            id=0,
            name=name,
            hashed_pwd=self._password_hasher.hash(password),
            email=email,
            registration_key=key,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        self._mailer.send_registration_link(
            persisted, registration_link(self._mainsite, persisted.name, key)
        )
        logger.info(f"auth.register: pending user_id={persisted.id}")
        return persisted
