"""Tests for logging configuration."""

import logging

from dvids_submit.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("dvids_submit")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging(logging.DEBUG)
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
