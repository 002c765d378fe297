from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import SessionStore


class MySQLSessionStore(SessionStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, sid: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT data FROM sessions WHERE session_id=%s AND expires_at > UTC_TIMESTAMP()",
                (sid,),
            )
            row = fetchone(cur)
            return row["data"] if row else None

    def set(self, sid: str, data: str, ttl_seconds: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(session_id, data, expires_at)
                VALUES(%s, %s, DATE_ADD(UTC_TIMESTAMP(), INTERVAL %s SECOND)) AS new
                ON DUPLICATE KEY UPDATE data=new.data, expires_at=new.expires_at
                """,
                (sid, data, int(ttl_seconds)),
            )

    def destroy(self, sid: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE session_id=%s", (sid,))

    def purge_expired(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE expires_at <= UTC_TIMESTAMP()")
            return int(cur.rowcount or 0)
