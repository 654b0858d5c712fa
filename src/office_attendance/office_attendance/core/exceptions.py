from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    `details` holds diagnostic fields that the API layer returns next to the message.
    """

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, **self.details}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class DuplicateRecordError(DomainError):
    """Raised when a uniqueness constraint rejects a write."""


class AttendanceRejected(DomainError):
    """Base for synchronous, non-retryable attendance rejections. No state is changed."""


class NonWorkingDayError(AttendanceRejected):
    """Weekend or active holiday."""


class OutsideTimeWindowError(AttendanceRejected):
    """Local time is outside the work window."""


class MissingLocationError(AttendanceRejected):
    """Mobile attendance without coordinates."""


class OutsideGeofenceError(AttendanceRejected):
    """Mobile attendance outside the admission radius."""


class OfficeNotConfiguredError(AttendanceRejected):
    """No active office location. A configuration problem rather than a user error."""


class AlreadyCompletedError(AttendanceRejected):
    """Both check-in and check-out are already set for today."""


class NotCheckedInError(AttendanceRejected):
    pass


class AlreadyCheckedOutError(AttendanceRejected):
    pass


class InvalidEditTargetError(AttendanceRejected):
    """Admin edit against a synthetic absence or a malformed record id."""


class InvalidEditTimeError(AttendanceRejected):
    """Admin-supplied time is outside the work window."""
