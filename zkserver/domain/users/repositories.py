# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from .entities import SessionToken, User


class UserRepository(Protocol):
    def find_by_name(self, name: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def update(self, user: User) -> None: ...
    def clear_registration_key(self, name: str, key: str) -> bool: ...


class SessionTokenRepository(Protocol):
    def issue(self, user_id: int) -> SessionToken: ...
    def find_user_id(self, token: str, lifetime: timedelta) -> int | None: ...
    def revoke(self, token: str) -> None: ...
    def purge_expired(self, lifetime: timedelta) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class RegistrationMailer(Protocol):
    def send_registration_link(self, user: User, link: str) -> None: ...
