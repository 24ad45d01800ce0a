import logging

import pytest

import anishare.__main__ as entry
from anishare.logging_config import LOG_FORMAT, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_setup_logging_installs_single_console_handler():
    root = setup_logging("debug")
    setup_logging("debug")
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == LOG_FORMAT


def test_setup_logging_unknown_level_falls_back_to_info():
    assert setup_logging("chatty").level == logging.INFO


def test_main_runs_app_factory(monkeypatch, clean_env):
    monkeypatch.setenv("ANISHARE_PORT", "8123")
    seen = {}
    monkeypatch.setattr(entry.uvicorn, "run", lambda target, **kw: seen.update(target=target, **kw))

    entry.main()

    assert seen["target"] == "anishare.__main__:app_factory"
    assert seen["factory"] is True
    assert seen["port"] == 8123


def test_app_factory_configures_logging_in_serving_process(monkeypatch, clean_env):
    monkeypatch.setenv("ANISHARE_LOG_LEVEL", "debug")
    monkeypatch.setenv("ADMIN_USERNAME", "factoryuser")

    app = entry.app_factory()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers[-1].formatter._fmt == LOG_FORMAT
    assert app.state.settings.admin_username == "factoryuser"
