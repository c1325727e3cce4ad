# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from zkserver.domain.users.entities import LoginProfile
from zkserver.domain.users.exceptions import InvalidCredentialsError, RegistrationPendingError
from zkserver.domain.users.repositories import PasswordHasher, SessionTokenRepository, UserRepository


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, name: str, password: str) -> tuple[LoginProfile, str]:
        user = self._users.find_by_name(name)
        if not user or not self._password_hasher.verify(password, user.hashed_pwd):
            raise InvalidCredentialsError()
        if not user.is_registered:
            raise RegistrationPendingError()

        token = self._tokens.issue(user.id)
        return LoginProfile.for_user(user), token.token
