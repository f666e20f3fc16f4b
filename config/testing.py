import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "user_directory_test"),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

# Cheap hashing keeps the suite fast; never use these values outside tests.
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
PASSWORD_SALT_LENGTH = 8

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
