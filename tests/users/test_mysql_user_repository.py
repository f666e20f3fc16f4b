from __future__ import annotations

import json

import pytest

from src.user_directory.user_directory.core.exceptions import NotFoundError
from src.user_directory.user_directory.database import connection
from src.user_directory.user_directory.database.connection import DBConfig, DatabaseConnection
from src.user_directory.user_directory.users.model import User
from src.user_directory.user_directory.users.mysql_user_repository import MySQLUserRepository
from src.user_directory.user_directory.users.service import UserService


class FakeCursor:
    def __init__(self, results):
        self._results = list(results)
        self._current = None
        self.executed: list[tuple[str, tuple]] = []
        self.rowcount = 0

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))
        result = self._results.pop(0) if self._results else []
        if isinstance(result, int):
            self.rowcount = result
            self._current = []
        else:
            self._current = result
            self.rowcount = len(result)

    def fetchone(self):
        return self._current[0] if self._current else None

    def fetchall(self):
        return list(self._current)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = 0
        self.rolled_back = 0

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed += 1

    def rollback(self):
        self.rolled_back += 1

    def close(self):
        pass


class FakeConnFactory:
    """Hands out connections that share one scripted cursor."""

    def __init__(self, *results):
        self.cursor = FakeCursor(results)
        self.connections: list[FakeConnection] = []

    def connect(self):
        conn = FakeConnection(self.cursor)
        self.connections.append(conn)
        return conn


def _row(**overrides):
    row = {
        "id": "a" * 32,
        "username": "Jane Doe",
        "password_hash": "pbkdf2:sha256:1000$salt$hash",
        "address": "1 Main St",
        "email": "jane@example.com",
        "contact": "555-0100",
        "qualification": '["BSc"]',
        "roles": b'["Employee"]',
        "active": 1,
    }
    row.update(overrides)
    return row


def test_get_by_email_uses_collated_comparison():
    factory = FakeConnFactory([_row()])
    repo = MySQLUserRepository(factory)

    user = repo.get_by_email("JANE@example.com")

    sql, params = factory.cursor.executed[0]
    assert "WHERE email COLLATE utf8mb4_unicode_ci = %s" in sql
    assert "LIMIT 1" in sql
    assert params == ("JANE@example.com",)
    assert user.qualification == ("BSc",)
    assert user.roles == ("Employee",)
    assert user.active is True


def test_get_by_username_returns_none_when_missing():
    repo = MySQLUserRepository(FakeConnFactory([]))

    assert repo.get_by_username("nobody") is None


def test_list_views_does_not_select_password_hash():
    row = _row()
    del row["password_hash"]
    factory = FakeConnFactory([row])
    repo = MySQLUserRepository(factory)

    views = repo.list_views()

    sql, _ = factory.cursor.executed[0]
    assert "password_hash" not in sql
    assert [v.username for v in views] == ["Jane Doe"]


def test_create_user_omits_default_columns_when_lists_missing():
    factory = FakeConnFactory(1, [_row(qualification="[]", roles='["Employee"]')])
    repo = MySQLUserRepository(factory)

    user = repo.create_user(
        username="Jane Doe",
        password_hash="hash",
        address="1 Main St",
        email="jane@example.com",
        contact="555-0100",
    )

    insert_sql, params = factory.cursor.executed[0]
    assert insert_sql.startswith("INSERT INTO users(id, username, password_hash, address, email, contact)")
    assert "qualification" not in insert_sql
    assert len(params[0]) == 32
    assert user.roles == ("Employee",)
    assert user.qualification == ()


def test_create_user_writes_lists_as_json():
    factory = FakeConnFactory(1, [_row()])
    repo = MySQLUserRepository(factory)

    repo.create_user(
        username="Jane Doe",
        password_hash="hash",
        address="1 Main St",
        email="jane@example.com",
        contact="555-0100",
        qualification=("BSc",),
        roles=("Manager", "Employee"),
    )

    insert_sql, params = factory.cursor.executed[0]
    assert "qualification, roles" in insert_sql
    assert json.loads(params[-2]) == ["BSc"]
    assert json.loads(params[-1]) == ["Manager", "Employee"]


def test_create_user_returns_none_when_nothing_inserted():
    repo = MySQLUserRepository(FakeConnFactory(0))

    assert (
        repo.create_user(
            username="Jane Doe",
            password_hash="hash",
            address="1 Main St",
            email="jane@example.com",
            contact="555-0100",
        )
        is None
    )


def test_save_updates_every_mutable_column():
    factory = FakeConnFactory(1)
    repo = MySQLUserRepository(factory)
    user = User(
        id="b" * 32,
        username="Jane Smith",
        password_hash="hash",
        address="2 High St",
        email="jane@example.com",
        contact="555-0100",
        qualification=("BSc",),
        roles=("Manager",),
        active=False,
    )

    repo.save(user)

    sql, params = factory.cursor.executed[0]
    assert sql.startswith("UPDATE users SET username=%s, password_hash=%s")
    assert params == ("Jane Smith", "hash", "2 High St", "jane@example.com", "555-0100", '["BSc"]', '["Manager"]', 0, "b" * 32)
    assert factory.connections[0].committed == 1


def test_save_returns_none_when_no_row_matched():
    repo = MySQLUserRepository(FakeConnFactory(0))
    user = User(
        id="c" * 32,
        username="Jane Doe",
        password_hash="hash",
        address="1 Main St",
        email="jane@example.com",
        contact="555-0100",
    )

    assert repo.save(user) is None


def test_update_of_row_deleted_before_write_raises_not_found():
    # get_by_id finds the row, the username lookup finds nothing, the UPDATE matches 0 rows.
    factory = FakeConnFactory([_row()], [], 0)
    service = UserService(MySQLUserRepository(factory), password_method="pbkdf2:sha256:1000")

    with pytest.raises(NotFoundError, match="User not found"):
        service.update_user(
            {
                "id": "a" * 32,
                "username": "Jane Doe",
                "address": "1 Main St",
                "email": "jane@example.com",
                "contact": "555-0100",
                "qualification": ["BSc"],
                "roles": ["Employee"],
                "active": True,
            }
        )


def test_connect_counts_matched_rows(monkeypatch):
    captured = {}

    def fake_connect(**kwargs):
        captured.update(kwargs)
        return object()

    monkeypatch.setattr(connection.mysql.connector, "connect", fake_connect)

    DatabaseConnection(DBConfig(host="db", port=3306, user="u", password="p", database="users_db")).connect()

    assert captured["client_flags"] == [connection.ClientFlag.FOUND_ROWS]
    assert captured["database"] == "users_db"
    assert captured["charset"] == "utf8mb4"


def test_delete_by_id_reports_rowcount():
    repo = MySQLUserRepository(FakeConnFactory(1, 0))

    assert repo.delete_by_id("x") is True
    assert repo.delete_by_id("x") is False


def test_errors_roll_back():
    class BrokenCursor(FakeCursor):
        def execute(self, sql, params=()):
            raise RuntimeError("boom")

    factory = FakeConnFactory()
    factory.cursor = BrokenCursor([])
    repo = MySQLUserRepository(factory)

    with pytest.raises(RuntimeError):
        repo.get_by_id("x")

    assert factory.connections[0].rolled_back == 1
