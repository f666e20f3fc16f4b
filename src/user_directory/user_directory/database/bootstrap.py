from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import mysql.connector

from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD, LOOKUP_COLLATION
from ..users.mysql_user_repository import MySQLUserRepository
from ..users.schema import USER_SCHEMA, FieldKind, FieldSpec, RecordSchema
from ..users.service import UserService
from .connection import DBConfig, DatabaseConnection

DEMO_USER = {
    "firstname": "Admin",
    "middlename": "",
    "lastname": "Demo",
    "password": "admin123",
    "address": "Head Office",
    "email": "admin@example.com",
    "contact": "0000000000",
    "qualification": ["Administration"],
    "roles": ["Admin"],
}


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "user_directory")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _sql_string(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "''") + "'"


def _json_array(values: Sequence[str]) -> str:
    return "JSON_ARRAY(" + ", ".join(_sql_string(v) for v in values) + ")"


def _column_ddl(spec: FieldSpec) -> str:
    null = "NOT NULL" if spec.required else "NULL"
    if spec.kind == FieldKind.ID:
        return f"`{spec.name}` CHAR(32) CHARACTER SET ascii COLLATE ascii_bin NOT NULL"
    if spec.kind == FieldKind.STRING:
        collate = f" COLLATE {LOOKUP_COLLATION}" if spec.collated else ""
        return f"`{spec.name}` VARCHAR(255){collate} {null}"
    if spec.kind == FieldKind.STRING_LIST:
        # MySQL only accepts expression defaults for JSON columns.
        return f"`{spec.name}` JSON NOT NULL DEFAULT ({_json_array(spec.default or ())})"
    if spec.kind == FieldKind.BOOLEAN:
        return f"`{spec.name}` TINYINT(1) NOT NULL DEFAULT {1 if spec.default else 0}"
    raise ValueError(f"Unsupported field kind: {spec.kind!r}")


def render_create_table(schema: RecordSchema = USER_SCHEMA) -> str:
    """Render an idempotent CREATE TABLE statement for a record schema."""
    lines = [_column_ddl(spec) for spec in schema.fields]

    pk = schema.primary_key
    if pk is not None:
        lines.append(f"PRIMARY KEY (`{pk.name}`)")
    for name in schema.collated_fields:
        lines.append(f"KEY `ix_{schema.table}_{name}` (`{name}`)")

    body = ",\n    ".join(lines)
    return (
        f"CREATE TABLE IF NOT EXISTS `{schema.table}` (\n    {body}\n)"
        f" ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE={LOOKUP_COLLATION}"
    )


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE {LOOKUP_COLLATION};"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema: RecordSchema = USER_SCHEMA) -> None:
    target = _as_target(db_config)
    ensure_database_exists(db_config)

    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute(render_create_table(schema))
        conn.commit()
    finally:
        conn.close()


def ensure_demo_user(db_config: dict, *, password_method: str = DEFAULT_PASSWORD_HASH_METHOD) -> bool:
    """Create the demo admin unless its email is already taken. Returns True if created."""
    target = _as_target(db_config)
    conn = DatabaseConnection(
        DBConfig(
            host=target.host,
            port=target.port,
            user=target.user,
            password=target.password,
            database=target.database,
        )
    )
    repo = MySQLUserRepository(conn)
    if repo.get_by_email(DEMO_USER["email"]):
        return False

    UserService(repo, password_method=password_method).create_user(DEMO_USER)
    return True


def list_tables(db_config: dict) -> list[str]:
    target = _as_target(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
