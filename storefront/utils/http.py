"""
Request helpers.
"""
from starlette.requests import Request


def wants_json(request: Request) -> bool:
    """True when the client asked for JSON rather than a page (redirect)."""
    return "application/json" in request.headers.get("accept", "")
