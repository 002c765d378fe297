from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "user_portal")),
        )


class DatabaseConnection:
    """Connection factory, shared per distinct ``DBConfig``.

    Connections themselves are short-lived: one per operation, opened by ``db_cursor``.
    """

    _instances: ClassVar[Dict[DBConfig, "DatabaseConnection"]] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        instance = cls._instances.get(config)
        if instance is None:
            instance = cls._instances[config] = cls(config)
        return instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
