from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Sequence

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD, DEFAULT_PASSWORD_SALT_LENGTH
from ..core.exceptions import ConflictError, InvalidInputError, NotFoundError
from .model import User, UserView
from .payloads import parse_create_payload, parse_delete_payload, parse_update_payload
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage the user directory (list, create, update, delete).

    Each operation takes the raw request payload, validates it, checks the
    store for existence/uniqueness, and performs at most one write.
    Uniqueness checks are not atomic with the write that follows them.
    """

    def __init__(
        self,
        users: UserRepository,
        *,
        password_method: str = DEFAULT_PASSWORD_HASH_METHOD,
        salt_length: int = DEFAULT_PASSWORD_SALT_LENGTH,
    ):
        self._users = users
        self._password_method = password_method
        self._salt_length = salt_length

    def _hash_password(self, password: str) -> str:
        return generate_password_hash(password, method=self._password_method, salt_length=self._salt_length)

    def list_users(self) -> Sequence[UserView]:
        users = self._users.list_views()
        if not users:
            raise NotFoundError("No users found")
        return users

    def create_user(self, payload: Any) -> User:
        data = parse_create_payload(payload)
        username = data.username

        duplicate_email = self._users.get_by_email(data.email)
        duplicate_contact = self._users.get_by_contact(data.contact)

        if duplicate_email and duplicate_contact:
            logger.debug("create rejected: email and contact already taken")
            raise ConflictError("Duplicate email and contact")
        if duplicate_email:
            logger.debug("create rejected: email already taken")
            raise ConflictError("Duplicate email")
        if duplicate_contact:
            logger.debug("create rejected: contact already taken")
            raise ConflictError("Duplicate contact")

        user = self._users.create_user(
            username=username,
            password_hash=self._hash_password(data.password),
            address=data.address,
            email=data.email,
            contact=data.contact,
            qualification=data.qualification,
            roles=data.roles,
        )
        if not user:
            raise InvalidInputError("Invalid user data received")

        logger.info("user created id=%s", user.id)
        return user

    def update_user(self, payload: Any) -> User:
        data = parse_update_payload(payload)

        user = self._users.get_by_id(data.id)
        if not user:
            raise NotFoundError("User not found")

        duplicate = self._users.get_by_username(data.username)
        # The record may keep its own username.
        if duplicate and duplicate.id != data.id:
            logger.debug("update rejected: username already taken id=%s", data.id)
            raise ConflictError("Duplicate username")

        updated = replace(
            user,
            username=data.username,
            address=data.address,
            email=data.email,
            contact=data.contact,
            qualification=data.qualification,
            roles=data.roles,
            active=data.active,
        )
        if data.password:
            updated = replace(updated, password_hash=self._hash_password(data.password))

        saved = self._users.save(updated)
        if not saved:
            # Removed by a concurrent request between the lookup and the write.
            raise NotFoundError("User not found")

        logger.info("user updated id=%s", saved.id)
        return saved

    def delete_user(self, payload: Any) -> User:
        data = parse_delete_payload(payload)

        user = self._users.get_by_id(data.id)
        if not user:
            raise NotFoundError("User not found")

        if not self._users.delete_by_id(user.id):
            # Removed by a concurrent request between the lookup and the delete.
            raise NotFoundError("User not found")

        logger.info("user deleted id=%s", user.id)
        return user
