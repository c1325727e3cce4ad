# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any, TypeVar

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from zkserver.shared.errors.validation import raise_validation_error

_UID_RE = re.compile(r"^[a-zA-Z0-9_.-]+$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

P = TypeVar("P", bound=BaseModel)


class RegistrationPayload(BaseModel):
    uid: str = Field(min_length=1, max_length=64)
    pwd: str = Field(min_length=8, max_length=128)
    email: str = Field(min_length=3, max_length=256)

    @field_validator("uid")
    @classmethod
    def validate_uid(cls, value: str) -> str:
        if not _UID_RE.match(value):
            raise ValueError("user id may contain only letters, digits, '.', '_' and '-'")
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("invalid email address")
        return value


class LoginPayload(BaseModel):
    uid: str = Field(min_length=1, max_length=64)
    pwd: str = Field(min_length=1, max_length=128)


def parse_payload(model: type[P], what: str, data: Any) -> P:
    try:
        return model.model_validate(data if data is not None else {})
    except PydanticValidationError as exc:
        raise_validation_error(exc, f"'{what}' data")
