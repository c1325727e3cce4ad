# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from html import escape

from flask import Blueprint, Response, make_response

from zkserver.application.use_cases.users.confirm_registration import ConfirmRegistrationUseCase
from zkserver.shared.errors import StorageError
from zkserver.shared.logging import logger

# Same page for unknown user, wrong key, used key and storage failure
FAILURE_PAGE = "<h1>registration failed</h1>"


def success_page(mainsite: str) -> str:
    return f'<h1>You are registered!</h1> <a href="{escape(mainsite)}">Proceed to the main site</a>'


class RegistrationController:
    def __init__(self, *, confirm_use_case: ConfirmRegistrationUseCase, mainsite: str) -> None:
        self._confirm_use_case = confirm_use_case
        self._mainsite = mainsite

    def register(self, uid: str, key: str) -> Response:
        try:
            registered = self._confirm_use_case.execute(uid, key)
        except StorageError:
            logger.exception("auth.confirm: storage failure")
            registered = False

        body = success_page(self._mainsite) if registered else FAILURE_PAGE
        response = make_response(body, 200)
        response.mimetype = "text/html"
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("registration", __name__)
        bp.add_url_rule("/register/<uid>/<key>", view_func=self.register, methods=["GET"])
        return bp
