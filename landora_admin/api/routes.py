import time
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from landora_admin.api.deps import DASHBOARD_PATH, LOGIN_PATH, require_admin_session
from landora_admin.schemas import SessionInfo, SessionPayload

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


# ── Public ──
public_router = APIRouter()


@public_router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(request, "home.html", {})


@public_router.get("/health")
async def health():
    return {"status": "ok"}


# ── Admin (page-level gate on every route) ──
admin_router = APIRouter(
    prefix="/admin",
    dependencies=[Depends(require_admin_session)],
)


@admin_router.get("")
async def admin_root():
    return RedirectResponse(url=DASHBOARD_PATH, status_code=302)


@admin_router.get("/dashboard", response_class=HTMLResponse)
async def admin_dashboard(
    request: Request,
    session: SessionPayload = Depends(require_admin_session),
):
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"expires_at": session.expires_at, "logout_path": f"{LOGIN_PATH}/logout"},
    )


@admin_router.get("/session", response_model=SessionInfo)
async def admin_session(session: SessionPayload = Depends(require_admin_session)):
    return SessionInfo(
        issued_at=session.issued_at,
        expires_at=session.expires_at,
        seconds_remaining=max(0, session.expires_at - int(time.time())),
    )
