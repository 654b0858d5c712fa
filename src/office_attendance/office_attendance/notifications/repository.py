from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        title: str,
        body: str,
        notification_type: str,
        data: Optional[dict[str, Any]] = None,
    ) -> int:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, unread_only: bool, limit: int) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, *, user_id: int, notification_id: int) -> bool:
        """Only marks the row when it belongs to `user_id`."""

        raise NotImplementedError

    def count_unread(self, user_id: int) -> int:
        raise NotImplementedError

    def delete_for_user(self, user_id: int) -> int:
        raise NotImplementedError
