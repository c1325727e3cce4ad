# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transport-independent request/reply shapes shared by all handlers."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from zkserver.shared.errors.base import DomainError

SERVER_ERROR = "server error"


@dataclass(slots=True, frozen=True)
class Message:
    what: str
    data: Any = None


@dataclass(slots=True, frozen=True)
class Reply:
    what: str
    content: Any = None

    @classmethod
    def server_error(cls, description: str) -> Reply:
        return cls(what=SERVER_ERROR, content=description)


class UnknownMessageError(DomainError):
    code = "unknown_message"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, what: str) -> None:
        super().__init__(f"invalid 'what' code: '{what}'", context={"what": what})
