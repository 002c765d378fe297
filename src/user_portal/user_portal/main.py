from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_PASSWORD_HASH_METHOD, DEFAULT_SESSION_COOKIE_MAX_AGE, DEFAULT_SESSION_STORE_TTL
from .database.bootstrap import apply_schema, list_tables
from .home.controller import register as register_home
from .sessions.interface import ServerSessionInterface
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder=None)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_COOKIE_MAX_AGE"] = int(
        getattr(settings, "SESSION_COOKIE_MAX_AGE", DEFAULT_SESSION_COOKIE_MAX_AGE)
    )
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))
    app.config["PROTECT_UPDATE_ENDPOINT"] = bool(getattr(settings, "PROTECT_UPDATE_ENDPOINT", False))

    if hasattr(settings, "validate_runtime_config"):
        settings.validate_runtime_config()

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            password_hash_method=getattr(settings, "PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD),
            allow_admin_self_registration=bool(getattr(settings, "ALLOW_ADMIN_SELF_REGISTRATION", True)),
        )

    app.session_interface = ServerSessionInterface(
        container.session_store,
        store_ttl=int(getattr(settings, "SESSION_STORE_TTL", DEFAULT_SESSION_STORE_TTL)),
    )
    app.extensions["user_portal"] = container

    register_home(app)
    register_users(app, container)

    return app
