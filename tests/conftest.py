import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import base64
import json
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from anishare.app import create_app
from anishare.auth.credentials import AdminCredential, CredentialSource
from anishare.config import Settings

NOW = 1_760_000_000_000  # fixed clock, ms since epoch


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        admin_username="testuser",
        admin_password="testpass",
        config_path=tmp_path / "admin.yml",
    )


@pytest.fixture()
def source() -> CredentialSource:
    return CredentialSource(AdminCredential(username="testuser", password="testpass"))


@pytest.fixture()
def client(settings) -> TestClient:
    return TestClient(create_app(settings), follow_redirects=False)


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    """No admin credentials in the environment and no config file on disk."""
    monkeypatch.delenv("ADMIN_USERNAME", raising=False)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    monkeypatch.delenv("ANISHARE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("ANISHARE_CONFIG_PATH", str(tmp_path / "missing.yml"))


def raw_token(data) -> str:
    """Build a token by hand, bypassing encode_session."""
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")


def cookie_value(set_cookie: str) -> Optional[str]:
    first = set_cookie.split(";", 1)[0]
    name, _, value = first.partition("=")
    return value if name == "session" else None
