import asyncio

import pytest

from storefront.auth.strategies import GitHubStrategy, LocalStrategy, resolve_github_user
from storefront.auth.passwords import hash_password, verify_password
from storefront.config.database import get_database
from storefront.main import create_app
from storefront.models import ROLE_ADMIN, ROLE_USER
from storefront.services.users import create_user
from storefront.utils.errors import ConflictError, InvalidCredentialsError

from .conftest import PASSWORD, login, run


# Local strategy

async def test_unknown_user_and_wrong_password_share_one_message(db):
    await create_user(db, username="alice", password_hash=hash_password(PASSWORD))
    strategy = LocalStrategy()

    with pytest.raises(InvalidCredentialsError) as unknown_user:
        await strategy.authenticate(db, "mallory", PASSWORD)
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await strategy.authenticate(db, "alice", "not-the-password")

    assert unknown_user.value.message == wrong_password.value.message
    assert str(unknown_user.value) == str(wrong_password.value)


async def test_valid_credentials_return_the_user(db):
    created = await create_user(db, username="alice", password_hash=hash_password(PASSWORD))

    user = await LocalStrategy().authenticate(db, "alice", PASSWORD)

    assert user.id == created.id


async def test_oauth_only_user_cannot_use_password_login(db):
    await create_user(db, username="github:alice", github_id="42")

    with pytest.raises(InvalidCredentialsError):
        await LocalStrategy().authenticate(db, "github:alice", "anything-at-all")


async def test_password_checks_leave_the_event_loop_free(db):
    await create_user(db, username="alice", password_hash=hash_password(PASSWORD))
    strategy = LocalStrategy()
    gaps = []
    done = asyncio.Event()

    async def ticker():
        loop = asyncio.get_running_loop()
        last = loop.time()
        while not done.is_set():
            await asyncio.sleep(0.01)
            now = loop.time()
            gaps.append(now - last)
            last = now

    ticking = asyncio.create_task(ticker())
    await asyncio.sleep(0)
    try:
        await strategy.authenticate(db, "alice", PASSWORD)
        with pytest.raises(InvalidCredentialsError):
            await strategy.authenticate(db, "alice", "not-the-password")
        with pytest.raises(InvalidCredentialsError):
            await strategy.authenticate(db, "mallory", PASSWORD)
    finally:
        done.set()
        await ticking

    # each bcrypt check takes far longer than this
    assert max(gaps) < 0.15


def test_password_hashing():
    password_hash = hash_password(PASSWORD)

    assert password_hash != PASSWORD
    assert verify_password(PASSWORD, password_hash)
    assert not verify_password("wrong", password_hash)
    assert not verify_password("x" * 100, password_hash)


# Login / logout routes

def test_login_redirects_and_starts_session(client, user):
    response = login(client, user.username)

    assert response.status_code == 303
    assert response.headers["location"] == "/products"

    current = client.get("/api/sessions/current")
    assert current.status_code == 200
    assert current.json()["username"] == "alice"
    assert "password_hash" not in current.json()


def test_failed_login_redirects_with_flash_message(client, user):
    response = login(client, user.username, "wrong-password")

    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert client.get("/login").json() == {"message": "Invalid username or password"}
    # flash messages are shown once
    assert client.get("/login").json() == {"message": None}


def test_failed_login_messages_match_over_http(client, user):
    login(client, "nobody")
    unknown_user = client.get("/login").json()["message"]
    login(client, user.username, "wrong-password")
    wrong_password = client.get("/login").json()["message"]

    assert unknown_user == wrong_password


def test_json_login(client, user):
    headers = {"Accept": "application/json"}

    ok = client.post("/login", data={"username": "alice", "password": PASSWORD}, headers=headers)
    assert ok.status_code == 200
    assert ok.json()["role"] == ROLE_USER

    failed = client.post("/login", data={"username": "alice", "password": "nope"}, headers=headers)
    assert failed.status_code == 401
    assert failed.json()["error"] == "invalid_credentials"


def test_logout_ends_session(user_client):
    response = user_client.get("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    current = user_client.get("/api/sessions/current", headers={"Accept": "application/json"})
    assert current.status_code == 401


def test_session_of_deleted_user_is_anonymous(user_client, user, db):
    run(db.users.delete_many({}))

    response = user_client.get("/api/sessions/current", follow_redirects=False)

    assert response.status_code == 303


# Registration

def test_register_creates_user_with_cart(client, db):
    response = client.post("/register", json={"username": "carol", "password": "long-enough"})

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "carol"
    assert body["role"] == ROLE_USER
    assert body["cart_id"]
    assert "password_hash" not in body
    assert run(db.carts.count_documents({"user_id": body["_id"]})) == 1

    assert login(client, "carol", "long-enough").headers["location"] == "/products"


def test_register_duplicate_username(client, user):
    response = client.post("/register", json={"username": "alice", "password": "long-enough"})

    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


@pytest.mark.parametrize("payload", [
    {"username": "al", "password": "long-enough"},
    {"username": "alice smith", "password": "long-enough"},
    {"username": "dave", "password": "short"},
    {"username": "dave", "password": "é" * 40},
])
def test_register_validation(client, payload):
    assert client.post("/register", json=payload).status_code == 422


# GitHub

def test_github_routes_unavailable_without_credentials(client):
    response = client.get("/auth/github", follow_redirects=False)

    assert response.status_code == 503
    assert response.json()["error"] == "oauth_unavailable"


async def test_github_profile_maps_to_local_user(db):
    profile = {"id": 1234, "login": "octocat", "role": ROLE_ADMIN}

    first = await resolve_github_user(db, profile)
    second = await resolve_github_user(db, profile)

    assert first.id == second.id
    assert first.username == "github:octocat"
    assert first.github_id == "1234"
    # the role comes from the local record, never from the provider
    assert first.role == ROLE_USER
    assert first.cart_id


async def test_renamed_github_account_gets_a_distinct_username(db):
    await resolve_github_user(db, {"id": 1, "login": "octocat"})

    # account 1 renamed itself and account 2 picked up the old login
    newcomer = await resolve_github_user(db, {"id": 2, "login": "octocat"})

    assert newcomer.username == "github:octocat-2"
    assert newcomer.github_id == "2"


async def test_github_profile_without_id_is_rejected(db):
    with pytest.raises(InvalidCredentialsError):
        await resolve_github_user(db, {"login": "ghost"})


@pytest.fixture
def github_client(settings, db, monkeypatch):
    from fastapi.testclient import TestClient

    async def fake_profile(self, request):
        return {"id": 99, "login": "octocat"}

    monkeypatch.setattr(GitHubStrategy, "fetch_profile", fake_profile)
    github_settings = settings.model_copy(update={
        "github_client_id": "client-id",
        "github_client_secret": "client-secret",
        "github_callback_url": "http://testserver/auth/github/callback",
    })
    application = create_app(github_settings)
    application.dependency_overrides[get_database] = lambda: db
    return TestClient(application)


def test_github_login_redirects_to_provider(github_client):
    response = github_client.get("/auth/github", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"].startswith("https://github.com/login/oauth/authorize")


def test_github_callback_logs_in_local_user(github_client):
    response = github_client.get("/auth/github/callback", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    current = github_client.get("/api/sessions/current").json()
    assert current["username"] == "github:octocat"
    assert current["github_id"] == "99"


def test_github_callback_failure_goes_back_to_login(github_client, monkeypatch):
    async def conflicting(self, request, db):
        raise ConflictError("Username github:octocat is already taken")

    monkeypatch.setattr(GitHubStrategy, "authenticate", conflicting)

    response = github_client.get("/auth/github/callback", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert github_client.get("/login").json()["message"] == "Username github:octocat is already taken"
