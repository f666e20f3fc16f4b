from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User, UserView


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service depends on this interface, not on a concrete store.
    Lookups by username, email and contact ignore case and accents.
    """

    def list_views(self) -> Sequence[UserView]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_contact(self, contact: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        address: str,
        email: str,
        contact: str,
        qualification: Optional[Sequence[str]] = None,
        roles: Optional[Sequence[str]] = None,
    ) -> Optional[User]:
        """Insert a user; omitted lists fall back to the schema defaults."""
        raise NotImplementedError

    def save(self, user: User) -> Optional[User]:
        """Replace the stored record; None if no row has this id."""
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
