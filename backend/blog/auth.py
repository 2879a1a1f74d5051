from fastapi import Request
from .errors import LoginRequired

def is_authenticated(request: Request) -> bool:
    # anything other than a literal True (missing, False, "true") is logged out
    return request.session.get("authenticated") is True

def current_username(request: Request) -> str | None:
    if not is_authenticated(request):
        return None
    return request.session.get("username") or None

def require_login(request: Request) -> None:
    """Route dependency guarding the authoring pages."""
    if not is_authenticated(request):
        raise LoginRequired("/login")

def start_session(request: Request, username: str) -> None:
    request.session["authenticated"] = True
    request.session["username"] = username

def end_session(request: Request) -> None:
    request.session["authenticated"] = False
    request.session["username"] = ""
