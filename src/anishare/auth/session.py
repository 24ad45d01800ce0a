# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Stateless session tokens.

The token is ``base64(JSON(payload))`` and lives only in the client's cookie.
It is encoded, not signed: whoever knows the administrator credentials can
mint a valid token offline, and the embedded fingerprint reveals the pair.
Every outstanding token dies when the configured credentials change.
"""

from __future__ import annotations

import base64
import json
import math
import time
from dataclasses import dataclass
from email.utils import formatdate
from typing import Optional

from anishare.auth.credentials import CredentialSource, fingerprint
from anishare.auth.errors import CredentialsChanged, ExpiredSession, MalformedToken

COOKIE_NAME = "session"
MAX_SESSION_AGE_MS = 24 * 60 * 60 * 1000  # 24 hours
COOKIE_ATTRIBUTES = "Path=/; HttpOnly; Secure; SameSite=Strict"
EPOCH_EXPIRES = "Thu, 01 Jan 1970 00:00:00 GMT"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SessionPayload:
    user_id: str
    username: str
    email: str
    issued_at: int  # ms since epoch
    credential_fingerprint: str


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    name: str
    email: str
    avatar: str = ""

    def as_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "avatar": self.avatar}


def encode_session(payload: SessionPayload) -> str:
    data = {
        "userId": payload.user_id,
        "username": payload.username,
        "email": payload.email,
        "loginTime": payload.issued_at,
        "envHash": payload.credential_fingerprint,
    }
    raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_session(token: str) -> SessionPayload:
    if not token:
        raise MalformedToken("empty token")
    try:
        # binascii.Error, UnicodeDecodeError and JSONDecodeError are all ValueErrors
        data = json.loads(base64.b64decode(token, validate=True).decode("utf-8"))
    except ValueError as e:
        raise MalformedToken(str(e)) from e

    if not isinstance(data, dict):
        raise MalformedToken("payload is not an object")

    for key in ("userId", "username", "email", "envHash"):
        if not isinstance(data.get(key), str):
            raise MalformedToken(f"missing or invalid {key!r}")

    login_time = data.get("loginTime")
    if isinstance(login_time, bool) or not isinstance(login_time, (int, float)):
        raise MalformedToken("missing or invalid 'loginTime'")
    if not math.isfinite(login_time):
        raise MalformedToken("non-finite 'loginTime'")

    return SessionPayload(
        user_id=data["userId"],
        username=data["username"],
        email=data["email"],
        issued_at=int(login_time),
        credential_fingerprint=data["envHash"],
    )


def validate_session(
    payload: SessionPayload,
    source: CredentialSource,
    *,
    now: Optional[int] = None,
) -> AuthenticatedUser:
    now = now_ms() if now is None else now
    if now - payload.issued_at > MAX_SESSION_AGE_MS:
        raise ExpiredSession(f"issued {now - payload.issued_at} ms ago")
    if payload.credential_fingerprint != fingerprint(source.get_credentials()):
        raise CredentialsChanged("credential fingerprint mismatch")
    return AuthenticatedUser(id=payload.user_id, name=payload.username, email=payload.email)


@dataclass(frozen=True)
class CookieDirective:
    """A ``Set-Cookie`` value for the session cookie."""

    value: str
    expires: str

    def header(self) -> str:
        return f"{COOKIE_NAME}={self.value}; {COOKIE_ATTRIBUTES}; Expires={self.expires}"


def session_cookie(token: str, *, now: Optional[int] = None) -> CookieDirective:
    now = now_ms() if now is None else now
    expires = formatdate((now + MAX_SESSION_AGE_MS) / 1000, usegmt=True)
    return CookieDirective(value=token, expires=expires)


def clear_session_cookie() -> CookieDirective:
    return CookieDirective(value="", expires=EPOCH_EXPIRES)
