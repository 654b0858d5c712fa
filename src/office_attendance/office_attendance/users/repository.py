from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for the user directory.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_active(self, *, user_id: Optional[int] = None) -> Sequence[User]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
