# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from zkserver.shared.config import AppConfig
from zkserver.shared.errors import StorageError
from zkserver.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


class Database:
    """One SQLite file shared by request handlers and the purge task."""

    def __init__(
        self,
        path: Path,
        *,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_timeout: float = 30.0,
    ) -> None:
        self.path = path
        self.engine: Engine = create_engine(
            f"sqlite:///{path}",
            echo=False,
            pool_pre_ping=True,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            connect_args={"check_same_thread": False, "timeout": int(pool_timeout)},
        )
        event.listen(self.engine, "connect", _set_sqlite_pragmas)
        self._sessions = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self._sessions()
        logger.debug("db.session: opened session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed session")
        except Exception:
            logger.debug("db.session: error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def open_database(config: AppConfig, path: Path | None = None) -> Database:
    path = path or config.db
    if config.createdirs:
        path.parent.mkdir(parents=True, exist_ok=True)
    if not path.parent.is_dir():
        raise StorageError(f"database directory does not exist: {path.parent}")
    try:
        database = Database(
            path,
            pool_size=config.database.pool_size,
            max_overflow=config.database.max_overflow,
            pool_timeout=config.database.pool_timeout,
        )
        database.ping()
    except SQLAlchemyError as exc:
        raise StorageError(f"cannot open database {path}") from exc
    logger.info(f"db: opened {path}")
    return database


def init_db(
    database: Database,
    token_lifetime: timedelta,
    *,
    clock: Callable[[], datetime] | None = None,
) -> int:
    """Create the schema if absent and drop tokens that expired while we were down."""
    # Import for side effect: registers the mapped tables on Base.metadata
    from zkserver.infrastructure.db import models  # noqa: F401
    from zkserver.infrastructure.repositories.users.sqlalchemy_user_repository import (
        SqlAlchemySessionTokenRepository,
        utcnow,
    )

    try:
        Base.metadata.create_all(bind=database.engine)
    except SQLAlchemyError as exc:
        raise StorageError("cannot create database schema") from exc
    logger.info("Database schema ensured")
    tokens = SqlAlchemySessionTokenRepository(database, clock=clock or utcnow)
    return tokens.purge_expired(token_lifetime)
