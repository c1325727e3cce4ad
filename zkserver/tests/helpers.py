from __future__ import annotations

from datetime import UTC, datetime, timedelta

from zkserver.domain.users.entities import User
from zkserver.infrastructure.container import Container

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class RecordingMailer:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_registration_link(self, user: User, link: str) -> None:
        self.sent.append((user.name, link))


def add_user(
    container: Container,
    name: str,
    password: str = "correct horse",
    *,
    registration_key: str | None = None,
) -> User:
    return container.user_repository.add(
        User(
            id=0,
            name=name,
            hashed_pwd=container.password_hasher.hash(password),
            email=f"{name}@zk.example",
            registration_key=registration_key,
            created_at=T0,
        )
    )
