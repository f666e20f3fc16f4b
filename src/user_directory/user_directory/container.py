from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_PASSWORD_HASH_METHOD, DEFAULT_PASSWORD_SALT_LENGTH
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository

    user_service: UserService


def build_container(
    *,
    db_config: dict,
    password_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    salt_length: int = DEFAULT_PASSWORD_SALT_LENGTH,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection(config)

    users_repo = MySQLUserRepository(conn)
    user_service = UserService(users_repo, password_method=password_method, salt_length=salt_length)

    return Container(
        conn=conn,
        users_repo=users_repo,
        user_service=user_service,
    )
