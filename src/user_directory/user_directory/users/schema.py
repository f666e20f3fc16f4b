"""Immutable description of the ``users`` record kind.

The persistence layer reads this once (DDL rendering, default values) and
never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.constants import DEFAULT_ACTIVE, DEFAULT_QUALIFICATION, DEFAULT_ROLES


class FieldKind:
    ID = "id"
    STRING = "string"
    STRING_LIST = "string_list"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: str
    required: bool = False
    default: Any = None
    # Equality lookups on this field ignore case and accents.
    collated: bool = False


@dataclass(frozen=True)
class RecordSchema:
    table: str
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def default_for(self, name: str) -> Any:
        return self.field(name).default

    @property
    def primary_key(self) -> Optional[FieldSpec]:
        return next((f for f in self.fields if f.kind == FieldKind.ID), None)

    @property
    def collated_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.collated)


USER_SCHEMA = RecordSchema(
    table="users",
    fields=(
        FieldSpec("id", FieldKind.ID, required=True),
        FieldSpec("username", FieldKind.STRING, required=True, collated=True),
        FieldSpec("password_hash", FieldKind.STRING, required=True),
        FieldSpec("address", FieldKind.STRING, required=True),
        FieldSpec("email", FieldKind.STRING, required=True, collated=True),
        FieldSpec("contact", FieldKind.STRING, required=True, collated=True),
        FieldSpec("qualification", FieldKind.STRING_LIST, default=DEFAULT_QUALIFICATION),
        FieldSpec("roles", FieldKind.STRING_LIST, default=DEFAULT_ROLES),
        FieldSpec("active", FieldKind.BOOLEAN, default=DEFAULT_ACTIVE),
    ),
)
