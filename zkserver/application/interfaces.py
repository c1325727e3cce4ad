# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol

from zkserver.domain.messages import Message, Reply
from zkserver.domain.users.entities import LoginProfile
from zkserver.shared.config import AppConfig


class PublicHandler(Protocol):
    def handle(self, config: AppConfig, message: Message) -> Reply: ...


class UserHandler(Protocol):
    def handle(
        self,
        session: MutableMapping[str, Any],
        config: AppConfig,
        message: Message,
        identity: LoginProfile | None,
    ) -> Reply: ...


class IdentityResolver(Protocol):
    def execute(self, token: Any) -> LoginProfile | None: ...
