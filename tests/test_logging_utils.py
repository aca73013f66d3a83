"""Tests for logging configuration."""

import logging

import pytest

from plantbook.logging_utils import LOG_LEVEL_ENV, configure_logging, resolve_level


@pytest.fixture
def package_logger():
    logger = logging.getLogger("plantbook")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.mark.parametrize(
    "value,expected",
    [(None, logging.WARNING), ("debug", logging.DEBUG), (" INFO ", logging.INFO), (logging.ERROR, logging.ERROR), ("loud", logging.WARNING)],
)
def test_resolve_level(value, expected):
    assert resolve_level(value) == expected


def test_handler_installed_once(package_logger):
    configure_logging("DEBUG")
    configure_logging("INFO")

    names = [handler.get_name() for handler in package_logger.handlers]
    assert names.count("plantbook-stream") == 1
    assert package_logger.level == logging.INFO


def test_level_from_environment(package_logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "error")

    assert configure_logging().level == logging.ERROR
