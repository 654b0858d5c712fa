from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.enums import Audience, EventType


@dataclass(frozen=True)
class AttendanceEvent:
    """A typed state-change event handed to the notifier."""

    event_type: EventType
    audience: Audience
    user_id: int
    message: str
    timestamp: datetime
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "audience": self.audience.value,
            "user_id": self.user_id,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            **self.data,
        }


@dataclass(frozen=True)
class Notification:
    """Inbox entry persisted for a user."""

    notification_id: int
    user_id: int
    title: str
    body: str
    notification_type: str
    is_read: bool
    created_at: datetime
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "notification_id": self.notification_id,
            "user_id": self.user_id,
            "title": self.title,
            "body": self.body,
            "type": self.notification_type,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
            "data": self.data,
        }
