"""Tests for CLI logging configuration."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from openshift_client.logging_setup import LOGGER_NAME, configure_logging


class TestConfigureLogging:
    def teardown_method(self):
        logger = logging.getLogger(LOGGER_NAME)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_default_level(self):
        logger = configure_logging()
        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0], RichHandler)

    def test_verbose(self):
        assert configure_logging(verbose=True).level == logging.INFO

    def test_debug_wins(self):
        assert configure_logging(verbose=True, debug=True).level == logging.DEBUG

    def test_idempotent(self):
        configure_logging()
        logger = configure_logging(debug=True)
        assert len(logger.handlers) == 1

    def test_library_loggers_are_children(self):
        logger = configure_logging(debug=True)
        child = logging.getLogger("openshift_client.client.service")
        assert child.getEffectiveLevel() == logging.DEBUG
        assert child.parent is logger or child.parent.name.startswith(LOGGER_NAME)
