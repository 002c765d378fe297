from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_user(self, user_id: str, changes: dict) -> Optional[User]:
        """Apply a partial update and return the updated user (None if it vanished)."""
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
