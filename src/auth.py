"""Cookie identity for the recipe site.

The ``user`` cookie is the whole session: its raw value is the identity,
with no signature, expiry or server-side record behind it.
"""
from typing import Optional

from fastapi import Cookie
from fastapi.responses import RedirectResponse

COOKIE_NAME = "user"
LOGIN_PATH = "/"
HOME_PATH = "/dashboard"


class LoginRequired(Exception):
    """Raised when a gated route is requested without the identity cookie."""


def require_user(user: Optional[str] = Cookie(None)) -> str:
    # presence is the only check, an empty value still counts
    if user is None:
        raise LoginRequired()
    return user


def redirect_to_login() -> RedirectResponse:
    return RedirectResponse(url=LOGIN_PATH, status_code=302)


def _valid_cookie_char(c: str) -> bool:
    return 0x20 <= ord(c) < 0x7f and c not in "\";\\"


def sanitize_cookie_value(value: str) -> str:
    """Drop characters that may not appear in a cookie value.

    Non-ASCII text is removed as well, so a name made only of it yields an
    empty cookie.
    """
    return "".join(c for c in value if _valid_cookie_char(c))


def login_response(username: str) -> RedirectResponse:
    response = RedirectResponse(url=HOME_PATH, status_code=302)
    # no SameSite attribute
    response.set_cookie(
        COOKIE_NAME, sanitize_cookie_value(username), path="/", samesite=None
    )
    return response
