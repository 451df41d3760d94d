"""Tests for logging setup."""

import logging

import pytest

from skillshelf.utils.config import Config
from skillshelf.utils.logging import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def reset_handlers():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_file_handler_writes_under_logging_path(test_config: Config):
    setup_logging(test_config)

    logging.getLogger("skillshelf.core.lint").info("hello from lint")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    log_file = test_config.logging_path / "skillshelf.log"
    assert "hello from lint" in log_file.read_text()


def test_repeated_setup_does_not_stack_handlers(test_config: Config):
    setup_logging(test_config)
    setup_logging(test_config, console_output=True)

    handlers = logging.getLogger(LOGGER_NAME).handlers
    assert len(handlers) == 2
    assert sum(isinstance(h, logging.StreamHandler) for h in handlers) == 2
