# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations


class AuthError(Exception):
    code = "auth_error"


class InvalidCredentials(AuthError):
    code = "invalid_credentials"


class SessionError(AuthError):
    """A session cookie that must be treated as absent.

    ``reason`` is for logs only; callers never surface it to the client.
    """

    reason = "invalid"


class MalformedToken(SessionError):
    reason = "malformed"


class ExpiredSession(SessionError):
    reason = "expired"


class CredentialsChanged(SessionError):
    reason = "credentials_changed"
