# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from zkserver.domain.users.entities import SessionToken as DomainSessionToken
from zkserver.domain.users.entities import User as DomainUser
from zkserver.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from zkserver.domain.users.repositories import SessionTokenRepository, UserRepository
from zkserver.infrastructure.db.models import SessionToken, User
from zkserver.infrastructure.db.session import Database
from zkserver.shared.errors import StorageError
from zkserver.shared.logging import logger

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


@contextmanager
def _transaction(database: Database) -> Iterator[Session]:
    try:
        with database.session_scope() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.error(f"db: {type(exc).__name__} on {database.path}: {exc}")
        raise StorageError() from exc


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        hashed_pwd=row.hashed_pwd,
        email=row.email,
        registration_key=row.registration_key,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database, *, clock: Clock = utcnow) -> None:
        self._database = database
        self._clock = clock

    def find_by_name(self, name: str) -> DomainUser | None:
        with _transaction(self._database) as session:
            row = session.scalars(select(User).where(User.name == name)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with _transaction(self._database) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._database.session_scope() as session:
                row = User(
                    name=user.name,
                    hashed_pwd=user.hashed_pwd,
                    email=user.email,
                    registration_key=user.registration_key,
                    created_at=self._clock(),
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            raise StorageError() from exc

    def update(self, user: DomainUser) -> None:
        with _transaction(self._database) as session:
            row = session.get(User, user.id)
            if row is None:
                raise UserNotFoundError()
            row.name = user.name
            row.hashed_pwd = user.hashed_pwd
            row.email = user.email
            row.registration_key = user.registration_key

    def clear_registration_key(self, name: str, key: str) -> bool:
        """Compare-and-clear in one statement; only one caller can win a given key."""
        with _transaction(self._database) as session:
            result = session.execute(
                update(User)
                .where(User.name == name, User.registration_key == key)
                .values(registration_key=None)
            )
            return result.rowcount == 1


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(self, database: Database, *, clock: Clock = utcnow) -> None:
        self._database = database
        self._clock = clock

    def issue(self, user_id: int) -> DomainSessionToken:
        token_value = secrets.token_urlsafe(48)
        issued_at = self._clock()
        with _transaction(self._database) as session:
            session.add(SessionToken(user_id=user_id, token=token_value, issued_at=issued_at))
        logger.info(f"Issued token for user={user_id} tok={token_value[:8]}…")
        return DomainSessionToken(user_id=user_id, token=token_value, issued_at=issued_at)

    def find_user_id(self, token: str, lifetime: timedelta) -> int | None:
        cutoff = self._clock() - lifetime
        with _transaction(self._database) as session:
            return session.scalars(
                select(SessionToken.user_id).where(
                    SessionToken.token == token,
                    SessionToken.issued_at > cutoff,
                )
            ).first()

    def revoke(self, token: str) -> None:
        with _transaction(self._database) as session:
            session.execute(delete(SessionToken).where(SessionToken.token == token))

    def purge_expired(self, lifetime: timedelta) -> int:
        cutoff = self._clock() - lifetime
        with _transaction(self._database) as session:
            result = session.execute(
                delete(SessionToken).where(SessionToken.issued_at <= cutoff)
            )
            return result.rowcount
