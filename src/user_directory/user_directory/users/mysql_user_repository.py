from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..core.constants import LOOKUP_COLLATION
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import User, UserView
from .repository import UserRepository
from .schema import USER_SCHEMA, RecordSchema

_VIEW_COLUMNS = "id, username, address, email, contact, qualification, roles, active"
_USER_COLUMNS = "id, username, password_hash, address, email, contact, qualification, roles, active"


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        id=str(row["id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        address=row["address"],
        email=row["email"],
        contact=row["contact"],
        qualification=load_json_list(row.get("qualification")),
        roles=load_json_list(row.get("roles")),
        active=bool(row.get("active", True)),
    )


def _row_to_view(row: Dict[str, Any]) -> UserView:
    return UserView(
        id=str(row["id"]),
        username=row["username"],
        address=row["address"],
        email=row["email"],
        contact=row["contact"],
        qualification=load_json_list(row.get("qualification")),
        roles=load_json_list(row.get("roles")),
        active=bool(row.get("active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection, schema: RecordSchema = USER_SCHEMA):
        self._conn_factory = conn_factory
        self._schema = schema

    @property
    def _table(self) -> str:
        return self._schema.table

    def list_views(self) -> Sequence[UserView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_VIEW_COLUMNS} FROM {self._table}")
            return [_row_to_view(r) for r in fetchall(cur)]

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM {self._table} WHERE id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def _get_by_collated(self, field: str, value: str) -> Optional[User]:
        if field not in self._schema.collated_fields:
            raise ValueError(f"{field} is not a collated lookup field")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM {self._table}
                WHERE {field} COLLATE {LOOKUP_COLLATION} = %s
                LIMIT 1
                """,
                (value,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_by_collated("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_by_collated("email", email)

    def get_by_contact(self, contact: str) -> Optional[User]:
        return self._get_by_collated("contact", contact)

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
        user_id = uuid.uuid4().hex
        values: Dict[str, Any] = {
            "id": user_id,
            "username": username,
            "password_hash": password_hash,
            "address": address,
            "email": email,
            "contact": contact,
        }
        # Omitted columns take the DEFAULT from the table definition.
        if qualification is not None:
            values["qualification"] = dump_json_list(qualification)
        if roles is not None:
            values["roles"] = dump_json_list(roles)

        columns = ", ".join(values)
        placeholders = ",".join(["%s"] * len(values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self._table}({columns}) VALUES({placeholders})",
                tuple(values.values()),
            )
            if cur.rowcount != 1:
                return None

        return self.get_by_id(user_id)

    def save(self, user: User) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {self._table}
                SET username=%s, password_hash=%s, address=%s, email=%s, contact=%s,
                    qualification=%s, roles=%s, active=%s
                WHERE id=%s
                """,
                (
                    user.username,
                    user.password_hash,
                    user.address,
                    user.email,
                    user.contact,
                    dump_json_list(user.qualification),
                    dump_json_list(user.roles),
                    1 if user.active else 0,
                    user.id,
                ),
            )
            if cur.rowcount == 0:
                return None
        return user

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE id=%s", (user_id,))
            return cur.rowcount > 0
