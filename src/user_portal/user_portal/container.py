from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_PASSWORD_HASH_METHOD
from .database.connection import DBConfig, DatabaseConnection
from .sessions.mysql_session_store import MySQLSessionStore
from .sessions.repository import SessionStore
from .users.mysql_user_repository import MySQLUserRepository
from .users.passwords import PasswordHasher
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    session_store: SessionStore

    auth_service: AuthService
    user_service: UserService


def build_services(
    *,
    users_repo: UserRepository,
    session_store: SessionStore,
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    allow_admin_self_registration: bool = True,
) -> Container:
    hasher = PasswordHasher(password_hash_method)
    return Container(
        users_repo=users_repo,
        session_store=session_store,
        auth_service=AuthService(
            users_repo,
            hasher,
            allow_admin_self_registration=allow_admin_self_registration,
        ),
        user_service=UserService(users_repo, hasher),
    )


def build_container(
    *,
    db_config: dict,
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    allow_admin_self_registration: bool = True,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        session_store=MySQLSessionStore(conn),
        password_hash_method=password_hash_method,
        allow_admin_self_registration=allow_admin_self_registration,
    )
