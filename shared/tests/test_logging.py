"""Tests for the logging setup."""

import io
import logging

import pytest
from shared.logging import NOISY_LOGGERS, get_logger, setup_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_setup_logger_writes_formatted_records(restore_root_logger):
    stream = io.StringIO()
    setup_logger(logging.INFO, stream=stream)

    get_logger("visual.test").info("Painting background")

    assert " - visual.test - INFO - Painting background" in stream.getvalue()


def test_setup_logger_twice_keeps_one_handler(restore_root_logger):
    first, second = io.StringIO(), io.StringIO()
    setup_logger(logging.INFO, stream=first)
    setup_logger(logging.INFO, stream=second)

    get_logger("visual.test").warning("once")

    assert first.getvalue() == ""
    assert second.getvalue().count("once") == 1


def test_noisy_loggers_follow_debug_level(restore_root_logger):
    setup_logger(logging.INFO, stream=io.StringIO())
    assert logging.getLogger("litellm").level == logging.WARNING

    setup_logger(logging.DEBUG, stream=io.StringIO())
    assert logging.getLogger("litellm").level == logging.DEBUG
