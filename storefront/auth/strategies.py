"""
Credential-verification strategies and the authenticator that holds them.

The authenticator is built once per application from settings and stored
on ``app.state``; handlers receive it through ``get_authenticator``.
"""
import logging
from typing import Any, Dict, Optional

from authlib.integrations.starlette_client import OAuth, OAuthError
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.concurrency import run_in_threadpool
from starlette.responses import RedirectResponse

from ..config.settings import Settings
from ..models import UserDocument
from ..services.users import create_user, find_user_by_github_id, find_user_by_username
from ..utils.errors import InvalidCredentialsError, OAuthUnavailableError
from .passwords import verify_dummy_password, verify_password

logger = logging.getLogger(__name__)

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_API_BASE_URL = "https://api.github.com/"


class LocalStrategy:
    """Username/password check against the stored bcrypt hash."""

    name = "local"

    async def authenticate(self, db: AsyncIOMotorDatabase, username: str, password: str) -> UserDocument:
        """
        Return the user for valid credentials.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password, with one
                shared message so callers cannot tell which
        """
        user = await find_user_by_username(db, username)

        if user is None or user.password_hash is None:
            await run_in_threadpool(verify_dummy_password, password)
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            raise InvalidCredentialsError()

        return user


class GitHubStrategy:
    """
    GitHub OAuth login through authlib.

    The GitHub profile only identifies an account; the principal is always
    the matching local user record, created on first login with the
    default role.
    """

    name = "github"

    def __init__(self, client_id: str, client_secret: str, callback_url: Optional[str] = None):
        self.callback_url = callback_url
        self.oauth = OAuth()
        self.oauth.register(
            name="github",
            client_id=client_id,
            client_secret=client_secret,
            authorize_url=GITHUB_AUTHORIZE_URL,
            access_token_url=GITHUB_ACCESS_TOKEN_URL,
            api_base_url=GITHUB_API_BASE_URL,
            client_kwargs={"scope": "user:email"},
        )

    @property
    def client(self):
        return self.oauth.create_client("github")

    async def authorize_redirect(self, request: Request) -> RedirectResponse:
        redirect_uri = self.callback_url or str(request.url_for("github_callback"))
        return await self.client.authorize_redirect(request, redirect_uri)

    async def fetch_profile(self, request: Request) -> Dict[str, Any]:
        """Exchange the callback code for a token and fetch the GitHub profile."""
        token = await self.client.authorize_access_token(request)
        response = await self.client.get("user", token=token)
        response.raise_for_status()
        return response.json()

    async def authenticate(self, request: Request, db: AsyncIOMotorDatabase) -> UserDocument:
        """
        Raises:
            InvalidCredentialsError: The OAuth exchange failed or the
                profile carries no account ID
        """
        try:
            profile = await self.fetch_profile(request)
        except OAuthError as oauth_error:
            logger.warning(f"GitHub OAuth callback failed: {oauth_error.error}")
            raise InvalidCredentialsError("GitHub authentication failed")

        return await resolve_github_user(db, profile)


async def resolve_github_user(db: AsyncIOMotorDatabase, profile: Dict[str, Any]) -> UserDocument:
    """Map a GitHub profile onto a local user, creating one on first login."""
    if profile.get("id") is None:
        raise InvalidCredentialsError("GitHub authentication failed")

    github_id = str(profile["id"])
    user = await find_user_by_github_id(db, github_id)
    if user is not None:
        return user

    login = profile.get("login") or github_id
    username = f"github:{login}"
    # A renamed GitHub account can leave its old login to someone else
    if await find_user_by_username(db, username) is not None:
        username = f"github:{login}-{github_id}"

    logger.info(f"Creating local user for GitHub account {login} ({github_id})")
    return await create_user(db, username=username, github_id=github_id)


class Authenticator:
    """The configured strategies. ``github`` is None when OAuth is not set up."""

    def __init__(self, local: LocalStrategy, github: Optional[GitHubStrategy] = None):
        self.local = local
        self.github = github

    def require_github(self) -> GitHubStrategy:
        if self.github is None:
            raise OAuthUnavailableError()
        return self.github


def build_authenticator(settings: Settings) -> Authenticator:
    github = None
    if settings.github_enabled:
        github = GitHubStrategy(
            settings.github_client_id,
            settings.github_client_secret,
            settings.github_callback_url,
        )
    else:
        logger.info("GitHub OAuth not configured, /auth/github is disabled")
    return Authenticator(local=LocalStrategy(), github=github)


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator
