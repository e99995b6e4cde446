"""
Session identity.

Only the user ID is kept in the signed session cookie; every request
looks the user up again and hands handlers a ``SessionContext``.
"""
from typing import Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..config.database import get_database
from ..models import UserDocument
from ..services.users import find_user_by_id

SESSION_USER_KEY = "user_id"
SESSION_FLASH_KEY = "flash"


class SessionContext:
    """The principal of the current request, or nobody."""

    def __init__(self, user: Optional[UserDocument] = None):
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin


def login_user(request: Request, user: UserDocument) -> None:
    # Fresh session on login; nothing from the anonymous session carries over
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


def logout_user(request: Request) -> None:
    request.session.clear()


def flash(request: Request, message: str) -> None:
    request.session[SESSION_FLASH_KEY] = message


def pop_flash(request: Request) -> Optional[str]:
    return request.session.pop(SESSION_FLASH_KEY, None)


async def get_session_context(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> SessionContext:
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        return SessionContext()

    user = await find_user_by_id(db, user_id)
    if user is None:
        # The user behind this session no longer exists
        request.session.pop(SESSION_USER_KEY, None)
    return SessionContext(user)
