"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_QUALIFICATION = ()
DEFAULT_ROLES = ("Employee",)
DEFAULT_ACTIVE = True

DEFAULT_PASSWORD_HASH_METHOD = "scrypt"
DEFAULT_PASSWORD_SALT_LENGTH = 16

# Case- and accent-insensitive comparison used for uniqueness lookups.
LOOKUP_COLLATION = "utf8mb4_unicode_ci"
