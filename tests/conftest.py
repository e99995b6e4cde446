import asyncio

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storefront.auth.passwords import hash_password
from storefront.config.database import get_database
from storefront.config.settings import Settings
from storefront.main import create_app
from storefront.models import ROLE_ADMIN, ROLE_USER
from storefront.services.users import create_user

PASSWORD = "correct-horse"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_name="storefront_test",
        session_secret="test-session-secret",
        github_client_id=None,
        github_client_secret=None,
        cors_origins=["*"],
    )


@pytest.fixture
def db():
    return AsyncMongoMockClient()["storefront_test"]


@pytest.fixture
def app(settings, db):
    application = create_app(settings)
    application.dependency_overrides[get_database] = lambda: db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


def run(coro):
    return asyncio.run(coro)


def make_product(code, price, category="electronics", availability="available", **extra):
    product = {
        "_id": ObjectId(),
        "code": code,
        "name": f"Product {code}",
        "price": price,
        "category": category,
        "availability": availability,
        "stock": 5,
    }
    product.update(extra)
    return product


@pytest.fixture
def products(db):
    docs = [
        make_product("P1", 30.0),
        make_product("P2", 10.0, category="books"),
        make_product("P3", 20.0, availability="electronics", category="misc"),
        make_product("P4", 50.0, category="books", availability="out_of_stock"),
        make_product("P5", 40.0),
    ]
    run(db.products.insert_many(docs))
    return docs


@pytest.fixture
def user(db):
    return run(create_user(db, username="alice", password_hash=hash_password(PASSWORD), role=ROLE_USER))


@pytest.fixture
def other_user(db):
    return run(create_user(db, username="bob", password_hash=hash_password(PASSWORD), role=ROLE_USER))


@pytest.fixture
def admin_user(db):
    return run(create_user(db, username="root", password_hash=hash_password(PASSWORD), role=ROLE_ADMIN))


def login(client, username, password=PASSWORD):
    return client.post(
        "/login",
        data={"username": username, "password": password},
        follow_redirects=False,
    )


@pytest.fixture
def user_client(client, user):
    response = login(client, user.username)
    assert response.status_code == 303
    return client


@pytest.fixture
def admin_client(client, admin_user):
    response = login(client, admin_user.username)
    assert response.status_code == 303
    return client
