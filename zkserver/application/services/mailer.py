# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from zkserver.domain.users.entities import User
from zkserver.domain.users.repositories import RegistrationMailer
from zkserver.shared.logging import logger


class LoggingRegistrationMailer(RegistrationMailer):
    """Stands in for outbound mail: the activation link only goes to the log."""

    def __init__(self, *, appname: str, admin_email: str) -> None:
        self._appname = appname
        self._admin_email = admin_email

    def send_registration_link(self, user: User, link: str) -> None:
        logger.info(
            f"mail: {self._appname} registration for {user.name} "
            f"from {self._admin_email}: {link}"
        )
