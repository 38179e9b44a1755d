from typing import Tuple
from uuid import uuid4

from fastapi import Request, Response

from webshop.config import settings
from webshop.utils.log import get_logger

log = get_logger("session")


def ensure_session(request: Request) -> Tuple[str, bool]:
    """
    Opaque session token from the cookie, or a fresh one on first contact.
    Returns (token, issued) and parks the token on request.state for the routes.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    issued = not token
    if issued:
        token = uuid4().hex
        log.debug("Issued new session %s", token)
    request.state.session_token = token
    return token, issued


def set_session_cookie(response: Response, token: str) -> None:
    # readable from page scripts
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_COOKIE_MAX_AGE,
        httponly=False,
        samesite="lax",
    )


def get_session_token(request: Request) -> str:
    token = getattr(request.state, "session_token", None)
    if token is None:
        token, _ = ensure_session(request)
    return token
