"""
Route guards. Failures raise; ``storefront.main`` turns them into a
redirect to the login page (or JSON for clients that ask for it).
"""
from fastapi import Depends

from ..models import UserDocument
from ..utils.errors import AdminRequiredError, NotAuthenticatedError
from .session import SessionContext, get_session_context


async def require_user(context: SessionContext = Depends(get_session_context)) -> UserDocument:
    if not context.is_authenticated:
        raise NotAuthenticatedError()
    return context.user


async def require_admin(user: UserDocument = Depends(require_user)) -> UserDocument:
    if not user.is_admin:
        raise AdminRequiredError()
    return user
