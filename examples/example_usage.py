"""Example: use the service layer directly (no Flask).

Controllers stay thin; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.user_directory.user_directory.container import build_container
from src.user_directory.user_directory.core.exceptions import NotFoundError


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    try:
        for user in container.user_service.list_users():
            print(user.to_dict())
    except NotFoundError as e:
        print(e)


if __name__ == "__main__":
    main()
