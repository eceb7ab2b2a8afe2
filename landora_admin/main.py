import logging
from typing import Callable, Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from landora_admin.api.deps import (
    DASHBOARD_PATH,
    HOME_PATH,
    LOGIN_PATH,
    AdminSessionRequired,
    clear_session_cookie,
    get_settings,
    is_protected_path,
    login_redirect,
    set_session_cookie,
    verify_request_session,
)
from landora_admin.api.routes import admin_router, public_router, templates
from landora_admin.config import Settings
from landora_admin.services.login import AdminLoginService
from landora_admin.services.passwords import AdminPasswordResolver
from landora_admin.services.rate_limit import LoginRateLimiter
from landora_admin.utils.request_meta import client_ip

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    rate_limiter: Optional[LoginRateLimiter] = None,
    enable_edge_gate: bool = True,
) -> FastAPI:
    """Build the admin gate app.

    Without an explicit `settings`, a fresh Settings() is read per request so
    secrets always reflect the current environment.
    """
    settings_provider: Callable[[], Settings] = (lambda: settings) if settings is not None else Settings
    boot = settings_provider()

    app = FastAPI(title="Landora Admin", docs_url=None, redoc_url=None)
    app.state.settings_provider = settings_provider
    if rate_limiter is None:
        rate_limiter = LoginRateLimiter(
            max_attempts=boot.ADMIN_LOGIN_MAX_ATTEMPTS,
            window_seconds=boot.ADMIN_LOGIN_WINDOW_SECONDS,
            max_entries=boot.ADMIN_RATE_LIMIT_MAX_ENTRIES,
        )
    app.state.login_service = AdminLoginService(
        rate_limiter=rate_limiter,
        password_resolver=AdminPasswordResolver(rounds=boot.ADMIN_BCRYPT_ROUNDS),
    )

    # ── Edge gate: every /admin request needs a valid signed cookie ──
    if enable_edge_gate:
        @app.middleware("http")
        async def admin_gate(request: Request, call_next):
            if not is_protected_path(request.url.path):
                return await call_next(request)
            if not verify_request_session(request, get_settings(request)).valid:
                logger.debug("Admin gate redirect: %s", request.url.path)
                return login_redirect()
            return await call_next(request)

    # ── Page-level gate failures ──
    @app.exception_handler(AdminSessionRequired)
    async def admin_session_required(request: Request, exc: AdminSessionRequired):
        return login_redirect()

    # ── Secret login routes ──
    @app.get(LOGIN_PATH, response_class=HTMLResponse)
    async def admin_access_page(request: Request):
        return _render_login(request)

    @app.post(LOGIN_PATH)
    async def admin_access_login(
        request: Request,
        email: str = Form(""),
        password: str = Form(""),
    ):
        current = get_settings(request)
        result = await request.app.state.login_service.attempt_login(
            email, password, client_ip(request), current
        )
        if not result.success:
            return _render_login(request, error=result.error, status_code=401)

        resp = RedirectResponse(url=DASHBOARD_PATH, status_code=303)
        set_session_cookie(resp, result.token, current)
        return resp

    @app.post(f"{LOGIN_PATH}/logout")
    async def admin_access_logout(request: Request):
        resp = RedirectResponse(url=HOME_PATH, status_code=303)
        clear_session_cookie(resp, get_settings(request))
        return resp

    app.include_router(public_router)
    app.include_router(admin_router)

    return app


def _render_login(request: Request, error: Optional[str] = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "admin_access.html",
        {"error": error, "action": LOGIN_PATH},
        status_code=status_code,
    )


def run():
    import uvicorn

    settings = Settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


app = create_app()
