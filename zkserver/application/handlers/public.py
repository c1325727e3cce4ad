# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from zkserver.application.handlers.payloads import RegistrationPayload, parse_payload
from zkserver.application.use_cases.users.register_user import RegisterUserUseCase
from zkserver.domain.messages import Message, Reply, UnknownMessageError
from zkserver.shared.config import AppConfig


class PublicMessageHandler:
    """Messages that need no logged-in user."""

    def __init__(self, *, register_use_case: RegisterUserUseCase) -> None:
        self._register_use_case = register_use_case

    def handle(self, config: AppConfig, message: Message) -> Reply:
        if message.what == "register":
            payload = parse_payload(RegistrationPayload, message.what, message.data)
            self._register_use_case.execute(payload.uid, payload.pwd, payload.email)
            return Reply(what="registration email sent")
        raise UnknownMessageError(message.what)
