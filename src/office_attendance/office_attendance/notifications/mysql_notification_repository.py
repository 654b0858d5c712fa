from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.datetime_utils import from_naive_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import Notification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        title: str,
        body: str,
        notification_type: str,
        data: Optional[dict[str, Any]] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(user_id, title, body, data, notification_type, is_read, created_at)
                VALUES(%s,%s,%s,%s,%s,0,UTC_TIMESTAMP())
                """,
                (int(user_id), title, body, dump_json(data), notification_type),
            )
            return int(cur.lastrowid)

    def list_for_user(self, user_id: int, *, unread_only: bool, limit: int) -> Sequence[Notification]:
        where = "user_id=%s AND is_read=0" if unread_only else "user_id=%s"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT notification_id, user_id, title, body, data, notification_type, is_read, created_at
                FROM notifications
                WHERE {where}
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [
                Notification(
                    notification_id=int(r["notification_id"]),
                    user_id=int(r["user_id"]),
                    title=r["title"],
                    body=r["body"],
                    notification_type=r["notification_type"],
                    is_read=bool(r["is_read"]),
                    created_at=from_naive_utc(r["created_at"]),
                    data=load_json(r.get("data")),
                )
                for r in fetchall(cur)
            ]

    def mark_read(self, *, user_id: int, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            # rowcount is 0 for an already-read row, so check existence separately.
            cur.execute(
                "SELECT 1 AS found FROM notifications WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            return fetchone(cur) is not None

    def count_unread(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM notifications WHERE user_id=%s AND is_read=0",
                (int(user_id),),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def delete_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM notifications WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
