import io
import logging

import pytest
import structlog

from repo_inspector.logging_setup import APP_LOGGER_NAME, configure_logging


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)


def test_events_go_to_configured_stream():
    stream = io.StringIO()
    configure_logging("debug", stream=stream)
    structlog.get_logger(f"{APP_LOGGER_NAME}.tests").info("sample_event", count=3)
    output = stream.getvalue()
    assert "sample_event" in output
    assert "count=3" in output


def test_level_filters_events():
    stream = io.StringIO()
    configure_logging("warning", stream=stream)
    log = structlog.get_logger(f"{APP_LOGGER_NAME}.tests")
    log.info("hidden_event")
    log.warning("visible_event")
    assert "hidden_event" not in stream.getvalue()
    assert "visible_event" in stream.getvalue()


def test_unknown_level_falls_back_to_warning():
    configure_logging("verbose", stream=io.StringIO())
    assert logging.getLogger(APP_LOGGER_NAME).level == logging.WARNING


def test_reconfiguring_replaces_handler():
    configure_logging("info", stream=io.StringIO())
    configure_logging("info", stream=io.StringIO())
    assert len(logging.getLogger(APP_LOGGER_NAME).handlers) == 1
