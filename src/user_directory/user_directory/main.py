from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_PASSWORD_HASH_METHOD, DEFAULT_PASSWORD_SALT_LENGTH
from .database.bootstrap import apply_schema, ensure_demo_user, list_tables
from .users.controller import register as register_users


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    log_level = getattr(settings, "LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Applies LOG_LEVEL even when the root logger already has a handler.
    logging.getLogger().setLevel(log_level)

    password_method = getattr(settings, "PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD)
    salt_length = int(getattr(settings, "PASSWORD_SALT_LENGTH", DEFAULT_PASSWORD_SALT_LENGTH))

    app.logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            created = ensure_demo_user(db_config, password_method=password_method)
            app.logger.info("demo seed ready (created=%s)", created)

        container = build_container(db_config=db_config, password_method=password_method, salt_length=salt_length)

    register_users(app, container)

    return app
