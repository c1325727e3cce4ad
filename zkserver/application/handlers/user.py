# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from zkserver.application.handlers.payloads import LoginPayload, parse_payload
from zkserver.application.use_cases.users.login_user import LoginUserUseCase
from zkserver.application.use_cases.users.logout_user import LogoutUserUseCase
from zkserver.domain.messages import Message, Reply, UnknownMessageError
from zkserver.domain.users.entities import LoginProfile
from zkserver.domain.users.exceptions import NotLoggedInError
from zkserver.shared.config import AppConfig
from zkserver.shared.logging import logger

SESSION_TOKEN_KEY = "token"

SessionStore = MutableMapping[str, Any]


class UserMessageHandler:
    """Messages tied to the caller's cookie session.

    ``login`` and ``logout`` manage the session itself; every other message
    needs an identity resolved from it.
    """

    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    def handle(
        self,
        session: SessionStore,
        config: AppConfig,
        message: Message,
        identity: LoginProfile | None,
    ) -> Reply:
        if message.what == "login":
            payload = parse_payload(LoginPayload, message.what, message.data)
            profile, token = self._login_use_case.execute(payload.uid, payload.pwd)
            # The token of an earlier login in this session is superseded
            self._logout_use_case.execute(session.get(SESSION_TOKEN_KEY))
            session.clear()
            session[SESSION_TOKEN_KEY] = token
            logger.info(f"auth.login: ok user_id={profile.userid}")
            return Reply(what="logged in", content=profile.to_dict())

        if message.what == "logout":
            self._logout_use_case.execute(session.get(SESSION_TOKEN_KEY))
            session.clear()
            return Reply(what="logged out")

        if identity is None:
            raise NotLoggedInError()

        if message.what == "getlogindata":
            return Reply(what="logindata", content=identity.to_dict())

        raise UnknownMessageError(message.what)
