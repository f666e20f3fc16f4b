from __future__ import annotations

import unicodedata
import uuid
from typing import Optional, Sequence

import pytest

from src.user_directory.user_directory.users.model import User, UserView
from src.user_directory.user_directory.users.schema import USER_SCHEMA
from src.user_directory.user_directory.users.service import UserService

TEST_HASH_METHOD = "pbkdf2:sha256:1000"


def collation_key(value: str) -> str:
    """Approximate utf8mb4_unicode_ci: ignore case and accents."""
    folded = unicodedata.normalize("NFKD", value.casefold())
    return "".join(ch for ch in folded if not unicodedata.combining(ch))


class InMemoryUsers:
    def __init__(self, *, fail_inserts: bool = False):
        self._rows: dict[str, User] = {}
        self.fail_inserts = fail_inserts
        self.saved: list[User] = []

    def list_views(self) -> Sequence[UserView]:
        return [u.to_view() for u in self._rows.values()]

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._rows.get(user_id)

    def _find(self, field: str, value: str) -> Optional[User]:
        key = collation_key(value)
        for user in self._rows.values():
            if collation_key(getattr(user, field)) == key:
                return user
        return None

    def get_by_username(self, username: str) -> Optional[User]:
        return self._find("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._find("email", email)

    def get_by_contact(self, contact: str) -> Optional[User]:
        return self._find("contact", contact)

    def create_user(
        self,
        *,
        username,
        password_hash,
        address,
        email,
        contact,
        qualification=None,
        roles=None,
    ) -> Optional[User]:
        if self.fail_inserts:
            return None
        user = User(
            id=uuid.uuid4().hex,
            username=username,
            password_hash=password_hash,
            address=address,
            email=email,
            contact=contact,
            qualification=tuple(qualification) if qualification is not None else USER_SCHEMA.default_for("qualification"),
            roles=tuple(roles) if roles is not None else USER_SCHEMA.default_for("roles"),
            active=USER_SCHEMA.default_for("active"),
        )
        self._rows[user.id] = user
        return user

    def save(self, user: User) -> Optional[User]:
        if user.id not in self._rows:
            return None
        self._rows[user.id] = user
        self.saved.append(user)
        return user

    def delete_by_id(self, user_id: str) -> bool:
        return self._rows.pop(user_id, None) is not None


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def user_service(users_repo) -> UserService:
    return UserService(users_repo, password_method=TEST_HASH_METHOD, salt_length=8)


@pytest.fixture
def create_payload():
    def _make(**overrides):
        payload = {
            "firstname": "Jane",
            "middlename": "",
            "lastname": "Doe",
            "password": "s3cret",
            "address": "1 Main St",
            "email": "jane@example.com",
            "contact": "555-0100",
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def failing_user_service() -> UserService:
    return UserService(InMemoryUsers(fail_inserts=True), password_method=TEST_HASH_METHOD, salt_length=8)
