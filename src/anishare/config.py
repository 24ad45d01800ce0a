# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Process configuration.

Settings are resolved once at start-up (environment first, then an optional
YAML file, then built-in defaults) and handed to the app as an immutable value.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

# Anchor the default config path to the project root, not the working directory.
BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = BASE_DIR / "data" / "admin.yml"

# Documented, non-secret fallback pair used when nothing is configured.
DEFAULT_ADMIN_USERNAME = "neko"
DEFAULT_ADMIN_PASSWORD = "neko"

TRUTHY = {"1", "true", "yes", "y"}


@dataclass(frozen=True)
class Settings:
    admin_username: str = DEFAULT_ADMIN_USERNAME
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    config_path: Path = DEFAULT_CONFIG_PATH
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"

    @property
    def uses_default_credentials(self) -> bool:
        return (
            self.admin_username == DEFAULT_ADMIN_USERNAME
            and self.admin_password == DEFAULT_ADMIN_PASSWORD
        )


def _load_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return raw if isinstance(raw, dict) else {}


def _first(*values: Any) -> Optional[str]:
    # Empty strings count as unset.
    for v in values:
        if v is None:
            continue
        s = str(v)
        if s:
            return s
    return None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env

    config_path = Path(env.get("ANISHARE_CONFIG_PATH") or DEFAULT_CONFIG_PATH).resolve()
    raw = _load_config_file(config_path)
    admin = raw.get("admin") or {}
    if not isinstance(admin, dict):
        admin = {}

    username = _first(env.get("ADMIN_USERNAME"), admin.get("username")) or DEFAULT_ADMIN_USERNAME
    password = _first(env.get("ADMIN_PASSWORD"), admin.get("password")) or DEFAULT_ADMIN_PASSWORD

    return Settings(
        admin_username=username,
        admin_password=password,
        config_path=config_path,
        host=env.get("ANISHARE_HOST", "0.0.0.0"),
        port=int(env.get("ANISHARE_PORT", "8000")),
        reload=env.get("ANISHARE_RELOAD", "false").lower() in TRUTHY,
        log_level=(_first(env.get("ANISHARE_LOG_LEVEL"), raw.get("log_level")) or "INFO").upper(),
    )
