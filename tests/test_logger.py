import io
import re

import pytest

from launchmon import logger
from launchmon.logger import LogLevel


@pytest.fixture
def stream():
    buffer = io.StringIO()
    logger.init(buffer)
    logger.set_log_level(LogLevel.DEBUG)
    yield buffer
    logger.init()
    logger.set_log_level(LogLevel.DEBUG)


def _emit(stream, log_fn, msg):
    stream.seek(0)
    stream.truncate()
    log_fn(msg)
    return stream.getvalue()


def test_log_level_filtering(stream):
    logger.set_log_level(LogLevel.DEBUG)
    assert "Debug message" in _emit(stream, logger.debug, "Debug message")
    assert "Info message" in _emit(stream, logger.info, "Info message")
    assert "Error message" in _emit(stream, logger.error, "Error message")

    logger.set_log_level(LogLevel.INFO)
    assert _emit(stream, logger.debug, "Debug message") == ""
    assert "Info message" in _emit(stream, logger.info, "Info message")
    assert "Error message" in _emit(stream, logger.error, "Error message")

    logger.set_log_level(LogLevel.ERROR)
    assert _emit(stream, logger.debug, "Debug message") == ""
    assert _emit(stream, logger.info, "Info message") == ""
    assert "Error message" in _emit(stream, logger.error, "Error message")


def test_log_level_to_string(stream):
    assert "[INFO]" in _emit(stream, logger.info, "Test message")
    assert "[DEBUG]" in _emit(stream, logger.debug, "Test message")
    assert "[ERROR]" in _emit(stream, logger.error, "Test message")


def test_color_for_level(stream):
    assert "\033[32m" in _emit(stream, logger.info, "Test message")
    assert "\033[34m" in _emit(stream, logger.debug, "Test message")
    assert "\033[31m" in _emit(stream, logger.error, "Test message")


def test_log_message_format(stream):
    output = _emit(stream, logger.info, "Test message")
    assert "[INFO]" in output
    assert "Test message" in output
    assert " - " in output
    pattern = r"[A-Za-z]+ [A-Za-z]+ +[0-9]+ [0-9]+:[0-9]+:[0-9]+ [0-9]+"
    assert re.search(pattern, output)
    assert output.endswith("Test message\n")