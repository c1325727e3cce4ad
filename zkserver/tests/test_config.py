from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from zkserver.shared.config import AppConfig, default_config, load_config
from zkserver.shared.config.settings import MAX_PURGE_INTERVAL_MS, MAX_TOKEN_EXPIRATION_MS


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "nope.toml")

    assert config.ip == "127.0.0.1"
    assert config.port == 8000
    assert config.appname == "mahbloag"
    assert config.token_lifetime == timedelta(days=7)
    assert config.purge_interval == timedelta(days=1)


def test_file_values_are_loaded(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        'ip = "0.0.0.0"\n'
        "port = 8010\n"
        f'db = "{(tmp_path / "zk.db").as_posix()}"\n'
        "createdirs = true\n"
        'mainsite = "https://notes.example/"\n'
        'appname = "zknotes"\n'
        "token_expiration_ms = 3600000\n"
        'future_option = "ignored"\n'
        "\n"
        "[security]\n"
        "cookie_secure = true\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.ip == "0.0.0.0"
    assert config.port == 8010
    assert config.db == tmp_path / "zk.db"
    assert config.createdirs is True
    assert config.appname == "zknotes"
    assert config.token_lifetime == timedelta(hours=1)
    assert config.security.cookie_secure is True


def test_malformed_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('appname = "zknotes"\nport = \n', encoding="utf-8")

    assert load_config(path) == default_config()


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('appname = "zknotes"\nport = "not a port"\n', encoding="utf-8")

    config = load_config(path)

    assert config.appname == "mahbloag"
    assert config.port == 8000


def test_config_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "other.toml"
    path.write_text("port = 9123\n", encoding="utf-8")
    monkeypatch.setenv("ZKSERVER_CONFIG", str(path))

    assert load_config().port == 9123


def test_config_is_immutable() -> None:
    config = AppConfig(port=8001)

    with pytest.raises(ValidationError):
        config.port = 9000  # type: ignore[misc]


@pytest.mark.parametrize(
    "line",
    [
        "token_expiration_ms = 100000000000000",
        "purge_interval_ms = 100000000000000",
        "token_expiration_ms = 0",
    ],
)
def test_out_of_range_durations_fall_back_to_defaults(tmp_path: Path, line: str) -> None:
    path = tmp_path / "config.toml"
    path.write_text(f'appname = "zknotes"\n{line}\n', encoding="utf-8")

    config = load_config(path)

    assert config == default_config()
    assert config.token_lifetime == timedelta(days=7)
    assert config.purge_interval == timedelta(days=1)


def test_longest_allowed_durations_are_accepted() -> None:
    config = AppConfig(
        token_expiration_ms=MAX_TOKEN_EXPIRATION_MS, purge_interval_ms=MAX_PURGE_INTERVAL_MS
    )

    assert config.token_lifetime == timedelta(days=3650)
    assert config.purge_interval == timedelta(days=365)
