import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "user_portal"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
PORT = int(os.getenv("PORT", "3000"))

# Session cookie lives 2 hours from the last write; stored records at most 14 days
SESSION_COOKIE_MAX_AGE = int(os.getenv("SESSION_COOKIE_MAX_AGE", str(2 * 60 * 60)))
SESSION_STORE_TTL = int(os.getenv("SESSION_STORE_TTL", str(14 * 24 * 60 * 60)))

PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:600000")

ALLOW_ADMIN_SELF_REGISTRATION = bool(int(os.getenv("ALLOW_ADMIN_SELF_REGISTRATION", "1")))
PROTECT_UPDATE_ENDPOINT = bool(int(os.getenv("PROTECT_UPDATE_ENDPOINT", "0")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
