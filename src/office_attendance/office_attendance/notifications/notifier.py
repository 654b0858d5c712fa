"""Event sinks for attendance events.

The attendance service receives a `Notifier` at construction; the real-time
transport that fans events out to clients lives outside this package.
"""
from __future__ import annotations

import logging
from typing import Iterable, Protocol

from ..core.enums import Audience, EventType
from .model import AttendanceEvent
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

_TITLES = {
    EventType.CHECK_IN: "Checked in",
    EventType.CHECK_OUT: "Checked out",
    EventType.ADMIN_EDIT: "Attendance updated",
}


class Notifier(Protocol):
    def publish(self, event: AttendanceEvent) -> None:
        raise NotImplementedError


class LoggingNotifier:
    def publish(self, event: AttendanceEvent) -> None:
        logger.info(
            "event=%s audience=%s user=%s %s",
            event.event_type.value,
            event.audience.value,
            event.user_id,
            event.message,
        )


class InboxNotifier:
    """Stores user-facing events in the notifications inbox."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def publish(self, event: AttendanceEvent) -> None:
        if event.audience != Audience.USER:
            return
        self._notifications.create(
            user_id=event.user_id,
            title=_TITLES[event.event_type],
            body=event.message,
            notification_type="system",
            data=event.to_dict(),
        )


class FanoutNotifier:
    def __init__(self, notifiers: Iterable[Notifier]):
        self._notifiers = list(notifiers)

    def publish(self, event: AttendanceEvent) -> None:
        for notifier in self._notifiers:
            try:
                notifier.publish(event)
            except Exception:
                logger.exception("%s failed to deliver %s event", type(notifier).__name__, event.event_type.value)
