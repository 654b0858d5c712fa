from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a user from the user directory.

    Note: Plain data object; this system only reads users.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    department: Optional[str] = None
    is_active: bool = True

    def summary(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.full_name,
            "email": self.email,
            "department": self.department,
        }
