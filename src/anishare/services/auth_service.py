# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from anishare.auth.credentials import CredentialSource, fingerprint, verify_credentials
from anishare.auth.errors import InvalidCredentials
from anishare.auth.session import (
    CookieDirective,
    SessionPayload,
    clear_session_cookie,
    encode_session,
    now_ms,
    session_cookie,
)

log = logging.getLogger(__name__)

ADMIN_USER_ID = "1"
ADMIN_EMAIL_DOMAIN = "admin.local"


@dataclass(frozen=True)
class LoginResult:
    success: bool
    cookie: Optional[CookieDirective] = None
    error: Optional[str] = None


def login(
    source: CredentialSource,
    username: str,
    password: str,
    *,
    now: Optional[int] = None,
) -> LoginResult:
    """Check the pair against the configured administrator and mint a session cookie."""
    if not verify_credentials(source, username, password):
        log.warning("Login rejected for username %r", username)
        return LoginResult(success=False, error=InvalidCredentials.code)

    now = now_ms() if now is None else now
    payload = SessionPayload(
        user_id=ADMIN_USER_ID,
        username=username,
        email=f"{username}@{ADMIN_EMAIL_DOMAIN}",
        issued_at=now,
        credential_fingerprint=fingerprint(source.get_credentials()),
    )
    log.info("Administrator %r logged in", username)
    return LoginResult(success=True, cookie=session_cookie(encode_session(payload), now=now))


def logout() -> CookieDirective:
    # Nothing server-side to revoke; the client drops the cookie.
    log.info("Session cookie cleared")
    return clear_session_cookie()
