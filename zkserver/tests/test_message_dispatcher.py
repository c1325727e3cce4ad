from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

import pytest

from zkserver.domain.messages import SERVER_ERROR, Message, Reply
from zkserver.infrastructure.container import Container
from zkserver.interfaces.http.dispatcher import GENERIC_FAILURE, MessageDispatcher
from zkserver.shared.config import AppConfig
from zkserver.tests.helpers import RecordingMailer, add_user


def _login(client, uid: str = "alice", pwd: str = "correct horse"):
    return client.post("/user", json={"what": "login", "data": {"uid": uid, "pwd": pwd}})


def _assert_server_error(response) -> str:
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["what"] == SERVER_ERROR
    assert isinstance(payload["content"], str) and payload["content"]
    return payload["content"]


def test_public_unknown_message_is_server_error(client) -> None:
    content = _assert_server_error(client.post("/public", json={"what": "frobnicate"}))

    assert "frobnicate" in content


@pytest.mark.parametrize(
    "kwargs",
    [
        {"data": "not json", "content_type": "text/plain"},
        {"data": "{broken", "content_type": "application/json"},
        {"json": {"data": {}}},
        {"json": {"what": 5}},
        {"json": ["what", "login"]},
    ],
)
@pytest.mark.parametrize("route", ["/public", "/user"])
def test_malformed_envelope_is_server_error(client, route: str, kwargs: dict[str, Any]) -> None:
    content = _assert_server_error(client.post(route, **kwargs))

    assert content.startswith("invalid message envelope")


def test_register_confirm_login_logout_flow(client, mailer: RecordingMailer) -> None:
    response = client.post(
        "/public",
        json={"what": "register", "data": {"uid": "alice", "pwd": "correct horse", "email": "alice@zk.example"}},
    )
    assert response.status_code == 200
    assert response.get_json()["what"] == "registration email sent"
    [(name, link)] = mailer.sent
    assert name == "alice"
    assert link.startswith("https://zk.example/register/alice/")

    content = _assert_server_error(_login(client))
    assert "not registered" in content

    assert "You are registered!" in client.get(urlsplit(link).path).get_data(as_text=True)

    login = _login(client)
    assert login.status_code == 200
    assert login.get_json()["what"] == "logged in"
    assert login.get_json()["content"]["name"] == "alice"

    whoami = client.post("/user", json={"what": "getlogindata"})
    assert whoami.get_json() == {
        "what": "logindata",
        "content": {"userid": 1, "name": "alice", "email": "alice@zk.example"},
    }

    content = _assert_server_error(client.post("/user", json={"what": "frobnicate"}))
    assert "invalid 'what' code" in content

    assert client.post("/user", json={"what": "logout"}).get_json()["what"] == "logged out"
    content = _assert_server_error(client.post("/user", json={"what": "getlogindata"}))
    assert content == "not logged in"


def test_register_duplicate_user_is_server_error(client, container: Container) -> None:
    add_user(container, "alice")

    content = _assert_server_error(
        client.post(
            "/public",
            json={"what": "register", "data": {"uid": "alice", "pwd": "correct horse", "email": "a@zk.example"}},
        )
    )

    assert content == "user exists already"


def test_register_invalid_payload_lists_fields(client) -> None:
    content = _assert_server_error(
        client.post("/public", json={"what": "register", "data": {"uid": "alice", "pwd": "short"}})
    )

    assert content.startswith("invalid 'register' data")
    assert "email" in content and "pwd" in content


def test_wrong_password_is_server_error(client, container: Container) -> None:
    add_user(container, "alice")

    content = _assert_server_error(_login(client, pwd="wrong"))

    assert content == "invalid user or password"


def test_user_message_without_session_is_server_error(client) -> None:
    assert _assert_server_error(client.post("/user", json={"what": "getlogindata"})) == "not logged in"


def test_session_cookie_is_set_on_login(client, container: Container) -> None:
    add_user(container, "alice")

    _login(client)

    cookie = client.get_cookie("session")
    assert cookie is not None
    # Permanent session: the cookie outlives the browser session
    assert cookie.expires is not None


def test_second_login_revokes_previous_token(client, container: Container) -> None:
    add_user(container, "alice")
    resolve = container.resolve_identity_use_case

    _login(client)
    with client.session_transaction() as session:
        first = session["token"]

    _login(client)
    with client.session_transaction() as session:
        second = session["token"]

    assert second != first
    assert resolve.execute(first) is None
    assert resolve.execute(second) is not None


def test_failed_login_keeps_current_session(client, container: Container) -> None:
    add_user(container, "alice")
    _login(client)

    _assert_server_error(_login(client, pwd="wrong"))

    whoami = client.post("/user", json={"what": "getlogindata"})
    assert whoami.get_json()["what"] == "logindata"


class _ExplodingHandler:
    def handle(self, *args: Any) -> Reply:
        raise RuntimeError("disk I/O error at /var/lib/secret.db")


class _NoIdentity:
    def execute(self, token: Any) -> None:
        return None


def test_unexpected_failure_does_not_leak_details(config: AppConfig) -> None:
    dispatcher = MessageDispatcher(
        config=config,
        public_handler=_ExplodingHandler(),
        user_handler=_ExplodingHandler(),
        identity_resolver=_NoIdentity(),
    )

    public = dispatcher.public({"what": "anything"})
    user = dispatcher.user({}, {"what": "anything"})

    assert public.what == user.what == SERVER_ERROR
    assert public.content == user.content == GENERIC_FAILURE


def test_reply_passes_through_unchanged(config: AppConfig) -> None:
    class Echo:
        def handle(self, config: AppConfig, message: Message) -> Reply:
            return Reply(what=message.what, content={"echo": message.data})

    dispatcher = MessageDispatcher(
        config=config,
        public_handler=Echo(),
        user_handler=_ExplodingHandler(),
        identity_resolver=_NoIdentity(),
    )

    response = dispatcher.public({"what": "ping", "data": [1, 2]})

    assert response.what == "ping"
    assert response.content == {"echo": [1, 2]}
