from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from zkserver.app import create_app
from zkserver.infrastructure.container import Container
from zkserver.infrastructure.db import init_db
from zkserver.shared.config import AppConfig
from zkserver.tests.helpers import FakeClock, RecordingMailer


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        db=tmp_path / "zk.db",
        mainsite="https://zk.example/",
        secret_key="test-secret",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def container(config: AppConfig, clock: FakeClock, mailer: RecordingMailer) -> Iterator[Container]:
    container = Container(config, clock=clock, mailer=mailer)
    init_db(container.database, config.token_lifetime, clock=clock)
    yield container
    container.database.dispose()


@pytest.fixture()
def flask_app(container: Container) -> Flask:
    app = create_app(container=container)
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(flask_app: Flask) -> Iterator[FlaskClient]:
    with flask_app.test_client() as client:
        yield client
