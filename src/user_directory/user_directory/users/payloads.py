"""Validated request inputs for the user operations.

Each ``parse_*`` function is pure: it takes the raw decoded JSON body and
either returns an input struct or raises ``InvalidInputError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import (
    is_non_empty_str_list,
    optional_str,
    require_bool,
    require_non_empty,
    require_non_empty_str_list,
    require_present,
)

CREATE_REQUIRED_MESSAGE = "All fields are required"
UPDATE_REQUIRED_MESSAGE = "All fields except password are required"
DELETE_REQUIRED_MESSAGE = "User ID Required"


@dataclass(frozen=True)
class CreateUserInput:
    firstname: str
    middlename: str
    lastname: str
    password: str
    address: str
    email: str
    contact: str
    # None means "use the storage defaults" for both lists.
    qualification: Optional[tuple[str, ...]] = None
    roles: Optional[tuple[str, ...]] = None

    @property
    def username(self) -> str:
        return derive_username(self.firstname, self.middlename, self.lastname)


@dataclass(frozen=True)
class UpdateUserInput:
    id: str
    username: str
    address: str
    email: str
    contact: str
    qualification: tuple[str, ...]
    roles: tuple[str, ...]
    active: bool
    password: Optional[str] = None


@dataclass(frozen=True)
class DeleteUserInput:
    id: str


def derive_username(firstname: str, middlename: str, lastname: str) -> str:
    """Join the non-empty name parts with single spaces, first to last."""
    return " ".join(part for part in (firstname, middlename, lastname) if part)


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    return raw if isinstance(raw, Mapping) else {}


def parse_create_payload(raw: Any) -> CreateUserInput:
    data = _as_mapping(raw)
    msg = CREATE_REQUIRED_MESSAGE

    firstname = require_non_empty(data.get("firstname"), msg)
    middlename = require_present(data.get("middlename"), msg)
    lastname = require_present(data.get("lastname"), msg)
    password = require_non_empty(data.get("password"), msg)
    address = require_non_empty(data.get("address"), msg)
    email = require_non_empty(data.get("email"), msg)
    contact = require_non_empty(data.get("contact"), msg)

    qualification = data.get("qualification")
    roles = data.get("roles")
    # Both lists are applied together or not at all.
    if is_non_empty_str_list(qualification) and is_non_empty_str_list(roles):
        lists = (tuple(qualification), tuple(roles))
    else:
        lists = (None, None)

    return CreateUserInput(
        firstname=firstname,
        middlename=middlename,
        lastname=lastname,
        password=password,
        address=address,
        email=email,
        contact=contact,
        qualification=lists[0],
        roles=lists[1],
    )


def parse_update_payload(raw: Any) -> UpdateUserInput:
    data = _as_mapping(raw)
    msg = UPDATE_REQUIRED_MESSAGE

    return UpdateUserInput(
        id=require_non_empty(data.get("id"), msg),
        username=require_non_empty(data.get("username"), msg),
        address=require_non_empty(data.get("address"), msg),
        email=require_non_empty(data.get("email"), msg),
        contact=require_non_empty(data.get("contact"), msg),
        qualification=tuple(require_non_empty_str_list(data.get("qualification"), msg)),
        roles=tuple(require_non_empty_str_list(data.get("roles"), msg)),
        active=require_bool(data.get("active"), msg),
        password=optional_str(data.get("password"), msg),
    )


def parse_delete_payload(raw: Any) -> DeleteUserInput:
    data = _as_mapping(raw)
    return DeleteUserInput(id=require_non_empty(data.get("id"), DELETE_REQUIRED_MESSAGE))
