import logging
import logging.handlers

import pytest

from masterwork import logger as log_module


@pytest.fixture
def fresh_root(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.setattr(log_module, "_configured", False)
    yield root
    for h in root.handlers:
        if h not in saved_handlers:
            h.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def _clear_handlers(root):
    # pytest attaches its capture handlers for the call phase; drop them here
    root.handlers = []


def test_file_logging_uses_rotating_handler(fresh_root, monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "masterwork.log"
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_TO_STDOUT", "false")
    monkeypatch.setenv("LOG_TO_FILE", "true")
    monkeypatch.setenv("LOG_FILE", str(log_file))
    _clear_handlers(fresh_root)

    log_module.get_logger("masterwork.test").debug("parsed %d items", 3)

    assert fresh_root.level == logging.DEBUG
    assert len(fresh_root.handlers) == 1
    assert isinstance(fresh_root.handlers[0], logging.handlers.RotatingFileHandler)
    fresh_root.handlers[0].flush()
    assert "DEBUG [masterwork.test] parsed 3 items" in log_file.read_text(encoding="utf-8")


def test_setup_runs_once(fresh_root, monkeypatch):
    monkeypatch.setenv("LOG_TO_STDOUT", "true")
    monkeypatch.setenv("LOG_TO_FILE", "false")
    _clear_handlers(fresh_root)

    log_module.setup_logging()
    log_module.setup_logging()

    assert len(fresh_root.handlers) == 1
    assert isinstance(fresh_root.handlers[0], logging.StreamHandler)


def test_existing_handlers_are_left_alone(fresh_root, monkeypatch):
    monkeypatch.setenv("LOG_TO_STDOUT", "true")
    _clear_handlers(fresh_root)
    host_handler = logging.NullHandler()
    fresh_root.addHandler(host_handler)

    log_module.setup_logging()

    assert fresh_root.handlers == [host_handler]
