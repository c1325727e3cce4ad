from __future__ import annotations

import json
from pathlib import Path

import pytest

from zkserver.__main__ import main
from zkserver.infrastructure.container import Container
from zkserver.infrastructure.db import init_db
from zkserver.shared.config import load_config
from zkserver.tests.helpers import add_user


def test_export_writes_users_as_json(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        f'db = "{(tmp_path / "data" / "zk.db").as_posix()}"\ncreatedirs = true\n',
        encoding="utf-8",
    )
    container = Container(load_config(config_file))
    init_db(container.database, container.config.token_lifetime)
    user = add_user(container, "alice", registration_key="abc123")
    container.session_token_repository.issue(user.id)
    container.database.dispose()

    target = tmp_path / "export.json"
    assert main(["--config", str(config_file), "--export", str(target)]) == 0

    exported = json.loads(target.read_text(encoding="utf-8"))
    assert [u["name"] for u in exported["users"]] == ["alice"]
    assert exported["users"][0]["registration_key"] == "abc123"
    assert exported["session_tokens"] == 1


def test_export_reports_unopenable_database(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        f'db = "{(tmp_path / "missing" / "zk.db").as_posix()}"\n', encoding="utf-8"
    )

    assert main(["--config", str(config_file), "--export", str(tmp_path / "out.json")]) == 1


def test_out_of_range_token_lifetime_falls_back_instead_of_crashing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "config.toml"
    config_file.write_text("token_expiration_ms = 100000000000000\n", encoding="utf-8")
    target = tmp_path / "export.json"

    assert main(["--config", str(config_file), "--export", str(target)]) == 0

    # Default database path, relative to the working directory
    assert (tmp_path / "mahbloag.db").is_file()
    assert json.loads(target.read_text(encoding="utf-8")) == {"users": [], "session_tokens": 0}
