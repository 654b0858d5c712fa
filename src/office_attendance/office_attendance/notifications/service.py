from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..core.exceptions import NotFoundError
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        limit: int = DEFAULT_NOTIFICATION_LIMIT,
    ) -> Sequence[Notification]:
        limit = max(1, min(int(limit), 200))
        return self._notifications.list_for_user(int(user_id), unread_only=unread_only, limit=limit)

    def mark_read(self, *, user_id: int, notification_id: int) -> None:
        if not self._notifications.mark_read(user_id=int(user_id), notification_id=int(notification_id)):
            raise NotFoundError("Notification not found")

    def unread_count(self, user_id: int) -> int:
        return self._notifications.count_unread(int(user_id))

    def clear_for_user(self, user_id: int) -> int:
        deleted = self._notifications.delete_for_user(int(user_id))
        logger.info("Cleared %s notifications for user %s", deleted, user_id)
        return deleted
