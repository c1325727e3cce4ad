# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Envelope entry points that turn every outcome into a ServerResponse."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from zkserver.application.handlers.user import SESSION_TOKEN_KEY
from zkserver.application.interfaces import IdentityResolver, PublicHandler, UserHandler
from zkserver.domain.messages import Message, Reply
from zkserver.interfaces.http.dto.messages import MessageEnvelope, ServerResponse
from zkserver.shared.config import AppConfig
from zkserver.shared.errors import AppError
from zkserver.shared.errors.validation import raise_validation_error
from zkserver.shared.logging import logger

GENERIC_FAILURE = "internal server error"


def decode_envelope(raw: Any) -> Message:
    try:
        return MessageEnvelope.model_validate(raw).to_message()
    except PydanticValidationError as exc:
        raise_validation_error(exc, "message envelope")


class MessageDispatcher:
    def __init__(
        self,
        *,
        config: AppConfig,
        public_handler: PublicHandler,
        user_handler: UserHandler,
        identity_resolver: IdentityResolver,
    ) -> None:
        self._config = config
        self._public_handler = public_handler
        self._user_handler = user_handler
        self._identity_resolver = identity_resolver

    def public(self, raw: Any) -> ServerResponse:
        def call() -> Reply:
            message = decode_envelope(raw)
            logger.info(f"public msg: {message.what}")
            return self._public_handler.handle(self._config, message)

        return self._guarded("public", call)

    def user(self, session: MutableMapping[str, Any], raw: Any) -> ServerResponse:
        def call() -> Reply:
            message = decode_envelope(raw)
            identity = self._identity_resolver.execute(session.get(SESSION_TOKEN_KEY))
            logger.info(
                f"user msg: {message.what}, user={identity.userid if identity else None}"
            )
            return self._user_handler.handle(session, self._config, message, identity)

        return self._guarded("user", call)

    def _guarded(self, channel: str, call: Callable[[], Reply]) -> ServerResponse:
        try:
            reply = call()
        except AppError as exc:
            logger.warning(f"'{channel}' err: {exc.code}: {exc.describe()}")
            reply = Reply.server_error(exc.describe())
        except Exception as exc:
            logger.exception(f"'{channel}' err: {type(exc).__name__}")
            reply = Reply.server_error(GENERIC_FAILURE)
        return ServerResponse.from_reply(reply)
