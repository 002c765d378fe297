from __future__ import annotations

import pytest

from src.user_portal.user_portal.container import Container, build_services
from src.user_portal.user_portal.main import create_app

from tests.fakes import FAST_HASH, InMemorySessionStore, InMemoryUsers


@pytest.fixture()
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture()
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def container(users_repo, session_store) -> Container:
    return build_services(users_repo=users_repo, session_store=session_store, password_hash_method=FAST_HASH)


@pytest.fixture()
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def registration() -> dict:
    return {
        "firstName": "A",
        "lastName": "B",
        "phoneNumber": "1",
        "address": "X",
        "role": "user",
        "email": "a@b.com",
        "password": "pw",
    }
