# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request, session

from zkserver.interfaces.http.dispatcher import MessageDispatcher


class MessageController:
    """``/public`` and ``/user``: always HTTP 200, failures live in the body."""

    def __init__(self, *, dispatcher: MessageDispatcher) -> None:
        self._dispatcher = dispatcher

    def public(self) -> tuple[Response, int]:
        reply = self._dispatcher.public(request.get_json(silent=True))
        return jsonify(reply.model_dump(mode="json")), 200

    def user(self) -> tuple[Response, int]:
        reply = self._dispatcher.user(session, request.get_json(silent=True))
        if session:
            session.permanent = True
        return jsonify(reply.model_dump(mode="json")), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("messages", __name__)
        bp.add_url_rule("/public", view_func=self.public, methods=["POST"])
        bp.add_url_rule("/user", view_func=self.user, methods=["POST"])
        return bp
