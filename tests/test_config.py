from pathlib import Path

import pytest

from anishare.config import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME, load_settings


def test_defaults_when_nothing_configured(clean_env):
    s = load_settings()
    assert s.admin_username == DEFAULT_ADMIN_USERNAME == "neko"
    assert s.admin_password == DEFAULT_ADMIN_PASSWORD == "neko"
    assert s.uses_default_credentials is True
    assert s.port == 8000
    assert s.log_level == "INFO"


def test_environment_credentials(clean_env, monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", "customuser")
    monkeypatch.setenv("ADMIN_PASSWORD", "custompass")
    s = load_settings()
    assert (s.admin_username, s.admin_password) == ("customuser", "custompass")
    assert s.uses_default_credentials is False


def test_each_field_defaults_independently(clean_env, monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", "customuser")
    s = load_settings()
    assert (s.admin_username, s.admin_password) == ("customuser", "neko")


def test_empty_environment_value_counts_as_unset(clean_env, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "")
    assert load_settings().admin_password == "neko"


def test_yaml_file_below_environment(tmp_path, monkeypatch, clean_env):
    cfg = tmp_path / "admin.yml"
    cfg.write_text(
        "admin:\n  username: fileuser\n  password: filepass\nlog_level: debug\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ANISHARE_CONFIG_PATH", str(cfg))

    s = load_settings()
    assert (s.admin_username, s.admin_password) == ("fileuser", "filepass")
    assert s.log_level == "DEBUG"
    assert s.config_path == Path(cfg).resolve()

    monkeypatch.setenv("ADMIN_PASSWORD", "envpass")
    assert load_settings().admin_password == "envpass"


@pytest.mark.parametrize("content", ["", "- just\n- a list\n", "admin: nope\n"])
def test_unusable_yaml_contributes_nothing(tmp_path, monkeypatch, clean_env, content):
    cfg = tmp_path / "admin.yml"
    cfg.write_text(content, encoding="utf-8")
    monkeypatch.setenv("ANISHARE_CONFIG_PATH", str(cfg))
    s = load_settings()
    assert (s.admin_username, s.admin_password) == ("neko", "neko")


def test_explicit_mapping_instead_of_environ(tmp_path):
    s = load_settings(
        {
            "ANISHARE_CONFIG_PATH": str(tmp_path / "none.yml"),
            "ADMIN_USERNAME": "a",
            "ADMIN_PASSWORD": "b",
            "ANISHARE_PORT": "9000",
            "ANISHARE_RELOAD": "yes",
        }
    )
    assert (s.admin_username, s.admin_password) == ("a", "b")
    assert s.port == 9000
    assert s.reload is True
