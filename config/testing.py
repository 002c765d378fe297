import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "user_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SESSION_COOKIE_MAX_AGE = 2 * 60 * 60
SESSION_STORE_TTL = 14 * 24 * 60 * 60

# cheap hashes keep the suite fast
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"

ALLOW_ADMIN_SELF_REGISTRATION = True
PROTECT_UPDATE_ENDPOINT = False

AUTO_INIT_DB = False
