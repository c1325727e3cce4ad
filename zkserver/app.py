# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import atexit
from datetime import timedelta

from flask import Flask

from zkserver.infrastructure.container import Container
from zkserver.infrastructure.db import init_db
from zkserver.shared.config import AppConfig, load_config
from zkserver.shared.errors import register_error_handler
from zkserver.shared.logging import logger
from zkserver.shared.middleware import configure_request_logging


def create_app(
    config: AppConfig | None = None,
    *,
    container: Container | None = None,
    start_scheduler: bool = False,
) -> Flask:
    """Build the app; storage is initialised before any route is registered."""
    if container is None:
        container = Container(config or load_config())
    config = container.config

    purged = init_db(container.database, config.token_lifetime, clock=container.clock)
    logger.info(f"startup: dropped {purged} expired token(s)")

    if start_scheduler:
        container.token_purge_scheduler.start()
        atexit.register(container.token_purge_scheduler.stop)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.secret_key,
        PERMANENT_SESSION_LIFETIME=timedelta(days=config.security.session_max_age_days),
        SESSION_COOKIE_SECURE=config.security.cookie_secure,
        SESSION_COOKIE_SAMESITE=config.security.cookie_samesite,
        SESSION_COOKIE_HTTPONLY=True,
    )
    app.extensions["zkserver"] = container

    register_error_handler(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.message_controller.as_blueprint())
    app.register_blueprint(container.registration_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    logger.info(f"Flask app initialized for {config.appname}")
    return app
