from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.user_directory.user_directory.database.bootstrap import ensure_demo_user


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    created = ensure_demo_user(db_config, password_method=getattr(settings, "PASSWORD_HASH_METHOD", "scrypt"))

    print(
        ("OK: Seeded demo admin -> " if created else "OK: Demo admin already present -> ")
        + f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
