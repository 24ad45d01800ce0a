# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from fastapi import HTTPException, Request

from anishare.auth.credentials import CredentialSource
from anishare.auth.errors import SessionError
from anishare.auth.session import AuthenticatedUser, decode_session, validate_session

log = logging.getLogger(__name__)

LOGIN_PATH = "/login"
REDIRECT_REASON = "redirected"
LOGIN_REDIRECT = f"{LOGIN_PATH}?{REDIRECT_REASON}=true"
PUBLIC_PATH_PREFIXES: Tuple[str, ...] = (
    "/login",
    "/api/auth",
    "/api/login",
    "/api/logout",
    "/api/test",
)

PROTECTED = "protected"
PUBLIC = "public"


def is_protected_path(path: str) -> bool:
    return not any(path.startswith(p) for p in PUBLIC_PATH_PREFIXES)


@dataclass(frozen=True)
class Continue:
    user: Optional[AuthenticatedUser] = None


@dataclass(frozen=True)
class Redirect:
    location: str
    reason: str = REDIRECT_REASON


GateResult = Union[Continue, Redirect]


class AccessGate:
    """Per-request decision: let the request through or send it to the login page."""

    def __init__(self, source: CredentialSource):
        self.source = source

    @property
    def redirect(self) -> Redirect:
        return Redirect(location=LOGIN_REDIRECT)

    def classify(self, path: str) -> str:
        return PROTECTED if is_protected_path(path) else PUBLIC

    def identify(self, token: Optional[str], *, now: Optional[int] = None) -> Optional[AuthenticatedUser]:
        if not token:
            return None
        try:
            return validate_session(decode_session(token), self.source, now=now)
        except SessionError as e:
            log.debug("Session rejected (%s): %s", e.reason, e)
            return None

    def resolve(self, path: str, token: Optional[str], *, now: Optional[int] = None) -> GateResult:
        if self.classify(path) == PUBLIC:
            return Continue()
        if not token:
            log.debug("No session cookie for %s", path)
            return self.redirect
        user = self.identify(token, now=now)
        if user is None:
            log.debug("Invalid session for %s", path)
            return self.redirect
        return Continue(user=user)


# --- FastAPI dependencies for downstream handlers ---

def current_user_optional(request: Request) -> Optional[AuthenticatedUser]:
    return getattr(request.state, "user", None)


def require_user(request: Request) -> AuthenticatedUser:
    u = current_user_optional(request)
    if u:
        return u
    raise HTTPException(status_code=303, headers={"Location": LOGIN_REDIRECT})
