from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.constants import DEFAULT_ACTIVE, DEFAULT_QUALIFICATION, DEFAULT_ROLES


@dataclass(frozen=True)
class User:
    """Domain entity: a stored user record.

    Plain data object; no persistence code lives here.
    """

    id: str
    username: str
    password_hash: str
    address: str
    email: str
    contact: str
    qualification: tuple[str, ...] = DEFAULT_QUALIFICATION
    roles: tuple[str, ...] = DEFAULT_ROLES
    active: bool = DEFAULT_ACTIVE

    def to_view(self) -> "UserView":
        return UserView(
            id=self.id,
            username=self.username,
            address=self.address,
            email=self.email,
            contact=self.contact,
            qualification=self.qualification,
            roles=self.roles,
            active=self.active,
        )


@dataclass(frozen=True)
class UserView:
    """A user as returned to callers: everything except the password hash."""

    id: str
    username: str
    address: str
    email: str
    contact: str
    qualification: tuple[str, ...] = DEFAULT_QUALIFICATION
    roles: tuple[str, ...] = DEFAULT_ROLES
    active: bool = DEFAULT_ACTIVE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "address": self.address,
            "email": self.email,
            "contact": self.contact,
            "qualification": list(self.qualification),
            "roles": list(self.roles),
            "active": self.active,
        }
