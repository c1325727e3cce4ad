# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    hashed_pwd: str
    email: str
    registration_key: str | None
    created_at: datetime

    @property
    def is_registered(self) -> bool:
        return self.registration_key is None


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    issued_at: datetime


@dataclass(slots=True, frozen=True)
class LoginProfile:
    """What a client may see about the logged-in user."""

    userid: int
    name: str
    email: str

    @classmethod
    def for_user(cls, user: User) -> LoginProfile:
        return cls(userid=user.id, name=user.name, email=user.email)

    def to_dict(self) -> dict[str, Any]:
        return {"userid": self.userid, "name": self.name, "email": self.email}
