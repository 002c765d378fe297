from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = (
    "user_id, first_name, last_name, phone_number, address, role, email, password_hash, created_at, updated_at"
)

# service-level field name -> column
_UPDATABLE_COLUMNS = {
    "first_name": "first_name",
    "last_name": "last_name",
    "phone_number": "phone_number",
    "address": "address",
    "role": "role",
    "email": "email",
    "password_hash": "password_hash",
}


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=str(row["user_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        phone_number=row["phone_number"],
        address=row["address"],
        role=row["role"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        first_name: str,
        last_name: str,
        phone_number: str,
        address: str,
        role: str,
        email: str,
        password_hash: str,
    ) -> User:
        user_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, first_name, last_name, phone_number, address, role, email, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, first_name, last_name, phone_number, address, role, email, password_hash),
            )
        return User(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            address=address,
            role=role,
            email=email,
            password_hash=password_hash,
        )

    def update_user(self, user_id: str, changes: dict) -> Optional[User]:
        assignments = []
        params: list = []
        for field, value in changes.items():
            column = _UPDATABLE_COLUMNS.get(field)
            if not column:
                raise KeyError(f"Unknown user field: {field}")
            assignments.append(f"{column}=%s")
            params.append(value)

        with db_cursor(self._conn_factory) as (_, cur):
            if assignments:
                cur.execute(
                    f"UPDATE users SET {', '.join(assignments)} WHERE user_id=%s",
                    (*params, user_id),
                )
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at ASC")
            return [_row_to_user(r) for r in fetchall(cur)]
