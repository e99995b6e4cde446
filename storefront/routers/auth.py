"""
Login, logout, registration and GitHub OAuth routes.
"""
import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from ..auth.passwords import hash_password
from ..auth.session import flash, login_user, logout_user, pop_flash
from ..auth.guards import require_user
from ..auth.strategies import Authenticator, get_authenticator
from ..config.database import get_database
from ..models import UserDocument
from ..schemas import LoginPageResponse, RegisterRequest, UserResponse
from ..services.users import create_user
from ..utils.errors import InvalidCredentialsError, StorefrontError
from ..utils.http import wants_json

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def to_user_response(user: UserDocument) -> UserResponse:
    return UserResponse.model_validate(user.model_dump(by_alias=True))


def _settings(request: Request):
    return request.app.state.settings


@router.get("/login", response_model=LoginPageResponse)
async def login_page(request: Request):
    """Login page data: the message left by the last failed attempt, if any"""
    return LoginPageResponse(message=pop_flash(request))


@router.post("/login")
async def login(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    db=Depends(get_database),
    authenticator: Authenticator = Depends(get_authenticator)
):
    """Log in with local credentials"""
    settings = _settings(request)
    try:
        user = await authenticator.local.authenticate(db, username, password)
    except InvalidCredentialsError as e:
        logger.info(f"Failed login for {username!r}")
        if wants_json(request):
            raise
        flash(request, e.message)
        return RedirectResponse(settings.login_url, status_code=303)

    login_user(request, user)
    logger.info(f"User logged in: {user.username}")
    if wants_json(request):
        return to_user_response(user)
    return RedirectResponse(settings.login_success_url, status_code=303)


@router.get("/logout")
async def logout(request: Request):
    """End the session"""
    logout_user(request)
    return RedirectResponse(_settings(request).login_url, status_code=303)


@router.post("/register", status_code=201, response_model=UserResponse)
async def register(body: RegisterRequest, db=Depends(get_database)):
    """Create a local user with an empty cart"""
    password_hash = await run_in_threadpool(hash_password, body.password)
    user = await create_user(db, username=body.username, password_hash=password_hash)
    return to_user_response(user)


@router.get("/auth/github")
async def github_login(request: Request, authenticator: Authenticator = Depends(get_authenticator)):
    """Start the GitHub OAuth flow"""
    github = authenticator.require_github()
    return await github.authorize_redirect(request)


@router.get("/auth/github/callback", name="github_callback")
async def github_callback(
    request: Request,
    db=Depends(get_database),
    authenticator: Authenticator = Depends(get_authenticator)
):
    """GitHub OAuth callback: log in the matching local user"""
    github = authenticator.require_github()
    try:
        user = await github.authenticate(request, db)
    except StorefrontError as e:
        logger.warning(f"GitHub login failed: {e.message}")
        flash(request, e.message)
        return RedirectResponse(_settings(request).login_url, status_code=303)

    login_user(request, user)
    logger.info(f"User logged in with GitHub: {user.username}")
    return RedirectResponse("/", status_code=303)


@router.get("/api/sessions/current", response_model=UserResponse)
async def current_session(user: UserDocument = Depends(require_user)):
    """The logged-in user"""
    return to_user_response(user)
