from __future__ import annotations

from dataclasses import replace

import pytest

from zkserver.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from zkserver.infrastructure.container import Container
from zkserver.tests.helpers import add_user


def test_update_persists_user_fields(container: Container) -> None:
    users = container.user_repository
    user = add_user(container, "alice", registration_key="abc123")

    users.update(
        replace(
            user,
            email="alice@notes.example",
            hashed_pwd=container.password_hasher.hash("new password"),
            registration_key=None,
        )
    )

    stored = users.find_by_name("alice")
    assert stored is not None
    assert stored.id == user.id
    assert stored.email == "alice@notes.example"
    assert stored.is_registered
    assert container.password_hasher.verify("new password", stored.hashed_pwd)
    assert users.find_by_id(user.id) == stored


def test_update_unknown_user_raises(container: Container) -> None:
    user = add_user(container, "alice")

    with pytest.raises(UserNotFoundError):
        container.user_repository.update(replace(user, id=user.id + 100))


def test_add_duplicate_name_raises(container: Container) -> None:
    add_user(container, "alice")

    with pytest.raises(UserAlreadyExistsError):
        add_user(container, "alice")


def test_find_missing_user_returns_none(container: Container) -> None:
    assert container.user_repository.find_by_name("nobody") is None
    assert container.user_repository.find_by_id(42) is None
