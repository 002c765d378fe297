import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "user_portal"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "3000"))

SESSION_COOKIE_MAX_AGE = int(os.getenv("SESSION_COOKIE_MAX_AGE", str(2 * 60 * 60)))
SESSION_STORE_TTL = int(os.getenv("SESSION_STORE_TTL", str(14 * 24 * 60 * 60)))
SESSION_COOKIE_SECURE = bool(int(os.getenv("SESSION_COOKIE_SECURE", "1")))

PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:600000")

# Admins are created with scripts/create_admin.py
ALLOW_ADMIN_SELF_REGISTRATION = bool(int(os.getenv("ALLOW_ADMIN_SELF_REGISTRATION", "0")))
PROTECT_UPDATE_ENDPOINT = bool(int(os.getenv("PROTECT_UPDATE_ENDPOINT", "0")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))


def validate_runtime_config() -> None:
    if SECRET_KEY == "please-set-SECRET_KEY":
        raise RuntimeError("SECRET_KEY must be set in production.")
