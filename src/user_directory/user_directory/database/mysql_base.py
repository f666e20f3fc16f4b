from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def dump_json_list(values: Sequence[str]) -> str:
    return json.dumps(list(values), ensure_ascii=False)


def load_json_list(value: Any) -> tuple[str, ...]:
    """Normalize a MySQL JSON array column across connector implementations.

    mysql-connector can return JSON as:
    - str
    - bytes / bytearray
    - an already decoded list (some C-extension builds)
    """

    if value is None:
        return ()

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    if isinstance(value, str):
        value = json.loads(value)

    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)

    raise TypeError(f"Unsupported MySQL JSON value type: {type(value)!r}")
