"""
Request-level helpers shared by the edge middleware and the admin router.

Both layers call `verify_request_session`, so a protected page is only
rendered when the middleware AND the page-level dependency accept the cookie.
"""

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from landora_admin.auth import COOKIE_NAME, verify_admin_session
from landora_admin.config import Settings
from landora_admin.schemas import SessionPayload, SessionVerification

ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/admin-access"
DASHBOARD_PATH = "/admin/dashboard"
HOME_PATH = "/"


class AdminSessionRequired(Exception):
    """Raised by the page-level gate when the admin cookie is missing or invalid."""


def get_settings(request: Request) -> Settings:
    return request.app.state.settings_provider()


def is_protected_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def verify_request_session(request: Request, settings: Settings) -> SessionVerification:
    token = request.cookies.get(COOKIE_NAME)
    return verify_admin_session(token, settings.auth_secret)


def login_redirect() -> RedirectResponse:
    # Path only: any query string on the original request is dropped.
    return RedirectResponse(url=LOGIN_PATH, status_code=302)


def require_admin_session(request: Request) -> SessionPayload:
    verification = verify_request_session(request, get_settings(request))
    if not verification.valid:
        raise AdminSessionRequired()
    return verification.payload


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        max_age=settings.ADMIN_SESSION_TTL_SECONDS,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value="",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        max_age=0,
        path="/",
    )
