# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import base64
import secrets
from dataclasses import dataclass

from anishare.config import Settings


@dataclass(frozen=True)
class AdminCredential:
    username: str
    password: str


class CredentialSource:
    """Holds the administrator credential for the life of the process."""

    def __init__(self, credential: AdminCredential):
        self._credential = credential

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialSource":
        return cls(AdminCredential(username=settings.admin_username, password=settings.admin_password))

    def get_credentials(self) -> AdminCredential:
        return self._credential


def fingerprint(cred: AdminCredential) -> str:
    """Reversible encoding of the credential pair, used only to detect rotation.

    Not a digest: anyone holding a fingerprint can recover the pair.
    """
    raw = f"{cred.username}:{cred.password}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def verify_credentials(source: CredentialSource, username: str, password: str) -> bool:
    cred = source.get_credentials()
    # Both comparisons always run.
    user_ok = secrets.compare_digest((username or "").encode("utf-8"), cred.username.encode("utf-8"))
    pass_ok = secrets.compare_digest((password or "").encode("utf-8"), cred.password.encode("utf-8"))
    return user_ok and pass_ok
