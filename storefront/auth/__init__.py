from .strategies import Authenticator, GitHubStrategy, LocalStrategy, build_authenticator, get_authenticator
from .session import SessionContext, get_session_context, login_user, logout_user
from .guards import require_admin, require_user

__all__ = [
    "Authenticator",
    "GitHubStrategy",
    "LocalStrategy",
    "build_authenticator",
    "get_authenticator",
    "SessionContext",
    "get_session_context",
    "login_user",
    "logout_user",
    "require_admin",
    "require_user"
]
