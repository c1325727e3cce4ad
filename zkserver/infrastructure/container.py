# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from zkserver.application.handlers import PublicMessageHandler, UserMessageHandler
from zkserver.application.services import LoggingRegistrationMailer, WerkzeugPasswordHasher
from zkserver.application.use_cases.users import (
    ConfirmRegistrationUseCase,
    LoginUserUseCase,
    LogoutUserUseCase,
    PurgeExpiredTokensUseCase,
    RegisterUserUseCase,
    ResolveIdentityUseCase,
)
from zkserver.domain.users.repositories import RegistrationMailer
from zkserver.infrastructure.db import Database, open_database
from zkserver.infrastructure.repositories.users import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
    utcnow,
)
from zkserver.infrastructure.repositories.users.sqlalchemy_user_repository import Clock
from zkserver.infrastructure.scheduler import TokenPurgeScheduler
from zkserver.interfaces.http.controllers.message_controller import MessageController
from zkserver.interfaces.http.controllers.misc_controller import MiscController
from zkserver.interfaces.http.controllers.registration_controller import (
    RegistrationController,
)
from zkserver.interfaces.http.dispatcher import MessageDispatcher
from zkserver.shared.config import AppConfig


class Container:
    """Wires every component against one read-only config."""

    def __init__(
        self,
        config: AppConfig,
        *,
        clock: Clock = utcnow,
        mailer: RegistrationMailer | None = None,
    ) -> None:
        self.config = config
        self.clock = clock
        self._mailer = mailer

    @cached_property
    def database(self) -> Database:
        return open_database(self.config)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def registration_mailer(self) -> RegistrationMailer:
        if self._mailer is not None:
            return self._mailer
        return LoggingRegistrationMailer(
            appname=self.config.appname, admin_email=self.config.admin_email
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database, clock=self.clock)

    @cached_property
    def session_token_repository(self) -> SqlAlchemySessionTokenRepository:
        return SqlAlchemySessionTokenRepository(self.database, clock=self.clock)

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            mailer=self.registration_mailer,
            mainsite=self.config.mainsite,
        )

    @cached_property
    def confirm_registration_use_case(self) -> ConfirmRegistrationUseCase:
        return ConfirmRegistrationUseCase(users=self.user_repository)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(tokens=self.session_token_repository)

    @cached_property
    def resolve_identity_use_case(self) -> ResolveIdentityUseCase:
        return ResolveIdentityUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
            lifetime=self.config.token_lifetime,
        )

    @cached_property
    def purge_tokens_use_case(self) -> PurgeExpiredTokensUseCase:
        return PurgeExpiredTokensUseCase(
            tokens=self.session_token_repository, lifetime=self.config.token_lifetime
        )

    @cached_property
    def token_purge_scheduler(self) -> TokenPurgeScheduler:
        return TokenPurgeScheduler(self.purge_tokens_use_case, self.config.purge_interval)

    # Message handlers

    @cached_property
    def public_message_handler(self) -> PublicMessageHandler:
        return PublicMessageHandler(register_use_case=self.register_user_use_case)

    @cached_property
    def user_message_handler(self) -> UserMessageHandler:
        return UserMessageHandler(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def message_dispatcher(self) -> MessageDispatcher:
        return MessageDispatcher(
            config=self.config,
            public_handler=self.public_message_handler,
            user_handler=self.user_message_handler,
            identity_resolver=self.resolve_identity_use_case,
        )

    # Controllers

    @cached_property
    def message_controller(self) -> MessageController:
        return MessageController(dispatcher=self.message_dispatcher)

    @cached_property
    def registration_controller(self) -> RegistrationController:
        return RegistrationController(
            confirm_use_case=self.confirm_registration_use_case,
            mainsite=self.config.mainsite,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)
