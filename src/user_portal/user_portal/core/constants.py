"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SESSION_USER_KEY = "user"

DEFAULT_SESSION_COOKIE_MAX_AGE = 2 * 60 * 60
DEFAULT_SESSION_STORE_TTL = 14 * 24 * 60 * 60

DEFAULT_PASSWORD_HASH_METHOD = "pbkdf2:sha256:600000"

REGISTRATION_FIELDS = ("firstName", "lastName", "phoneNumber", "address", "role", "email", "password")
