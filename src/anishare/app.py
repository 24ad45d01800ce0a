# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from anishare.auth.credentials import CredentialSource
from anishare.auth.errors import InvalidCredentials
from anishare.auth.session import COOKIE_NAME, AuthenticatedUser, CookieDirective
from anishare.config import Settings, load_settings
from anishare.permissions import AccessGate, Redirect, require_user
from anishare.services.auth_service import login, logout

log = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _json(status_code: int, body: dict, cookie: Optional[CookieDirective] = None) -> JSONResponse:
    resp = JSONResponse(body, status_code=status_code)
    if cookie is not None:
        # Rendered verbatim; set_cookie() lowercases and reorders attributes.
        resp.headers.append("set-cookie", cookie.header())
    return resp


def _field(body: Mapping[str, Any], name: str) -> str:
    v = body.get(name)
    return v if isinstance(v, str) else ""


async def _read_credentials(request: Request) -> Mapping[str, Any]:
    ctype = request.headers.get("content-type", "")
    if "application/json" in ctype:
        body = await request.json()
        return body if isinstance(body, dict) else {}
    # urlencoded and multipart; anything else parses as an empty form
    return await request.form()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    source = CredentialSource.from_settings(settings)
    gate = AccessGate(source)

    if settings.uses_default_credentials:
        log.warning("ADMIN_USERNAME/ADMIN_PASSWORD not set, using built-in default credentials")

    app = FastAPI(title="AniShare Admin")
    app.state.settings = settings
    app.state.gate = gate

    @app.middleware("http")
    async def _auth_middleware(request: Request, call_next):
        result = gate.resolve(request.url.path, request.cookies.get(COOKIE_NAME))
        if isinstance(result, Redirect):
            return RedirectResponse(url=result.location, status_code=303)
        request.state.user = result.user
        return await call_next(request)

    @app.get("/login", response_class=HTMLResponse)
    def login_page(request: Request):
        if gate.identify(request.cookies.get(COOKIE_NAME)):
            return RedirectResponse(url="/", status_code=303)
        return templates.TemplateResponse(
            request,
            "login.html",
            {"redirected": "redirected" in request.query_params},
        )

    @app.post("/api/login")
    async def api_login(request: Request):
        try:
            body = await _read_credentials(request)
        except (ValueError, MultiPartException, StarletteHTTPException):
            # bad JSON, or a multipart body Starlette refuses to parse
            return _json(400, {"success": False, "error": "invalid_request"})

        username = _field(body, "username")
        password = _field(body, "password")
        if not username or not password:
            return _json(400, {"success": False, "error": "missing_credentials"})

        result = login(source, username, password)
        if not result.success:
            return _json(401, {"success": False, "error": result.error or InvalidCredentials.code})
        return _json(200, {"success": True}, result.cookie)

    @app.post("/api/logout")
    def api_logout():
        return _json(200, {"success": True}, logout())

    @app.get("/api/test")
    def api_test():
        return {"status": "ok"}

    @app.get("/api/me")
    def api_me(user: AuthenticatedUser = Depends(require_user)):
        return user.as_dict()

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request, user: AuthenticatedUser = Depends(require_user)):
        return templates.TemplateResponse(request, "home.html", {"current_user": user})

    return app
