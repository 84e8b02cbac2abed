"""Tests for logging configuration."""

import logging

from face_tagger.api.app import create_app
from face_tagger.app_logging import PACKAGE_LOGGER, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()

    configure_logging()
    configure_logging("debug")

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging("chatty")

    assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO


def test_create_app_applies_configured_level(container) -> None:
    container.settings.log_level = "WARNING"

    create_app(container)

    assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING
    configure_logging()
