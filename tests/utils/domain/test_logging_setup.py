"""Level and handler selection for the storefront's logging."""

import logging
import logging.handlers

import pytest

from storefront.config import get_settings
from storefront.utils import logging as storefront_logging


@pytest.fixture()
def fresh_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("STOREFRONT_LOG_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "env, expected",
    [("test", "WARNING"), ("production", "INFO"), ("development", "DEBUG")],
)
def test_level_follows_environment(fresh_settings, env, expected):
    fresh_settings.setenv("PROTEAN_ENV", env)
    fresh_settings.delenv("STOREFRONT_LOG_LEVEL", raising=False)
    assert storefront_logging._level() == expected


def test_explicit_level_wins(fresh_settings):
    fresh_settings.setenv("PROTEAN_ENV", "production")
    fresh_settings.setenv("STOREFRONT_LOG_LEVEL", "error")
    assert storefront_logging._level() == "ERROR"


def test_console_and_one_rotating_file(fresh_settings, restore_root_logger, tmp_path):
    storefront_logging._setup_handlers("INFO")

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 2
    files = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert [h.baseFilename for h in files] == [str(tmp_path / "storefront.log")]
    assert logging.getLogger("protean").level == logging.WARNING
