# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select

from zkserver.infrastructure.db.models import SessionToken, User
from zkserver.infrastructure.db.session import Database


def export_db(database: Database) -> dict[str, Any]:
    """Dump the credential store as plain JSON-able data; tokens are only counted."""
    with database.session_scope() as session:
        users = session.scalars(select(User).order_by(User.id.asc())).all()
        token_count = session.scalar(select(func.count()).select_from(SessionToken)) or 0
        return {
            "users": [
                {
                    "id": row.id,
                    "name": row.name,
                    "hashed_pwd": row.hashed_pwd,
                    "email": row.email,
                    "registration_key": row.registration_key,
                    "created_at": row.created_at.isoformat() if row.created_at else None,
                }
                for row in users
            ],
            "session_tokens": token_count,
        }


__all__ = ["export_db"]
