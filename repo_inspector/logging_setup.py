import logging
import os
import sys
from typing import Optional, TextIO

import structlog

APP_LOGGER_NAME = "repo_inspector"
_level_names = ("debug", "info", "warning", "error", "critical")


def _renderer_colors(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(log_level_str: str = "warning", stream: Optional[TextIO] = None):
    """
    Routes structlog events for the repo_inspector logger hierarchy through
    stdlib logging to `stream` (stderr by default), so stdout stays free for
    the JSON report. Calling it again replaces the previous handler.
    """
    level_name = log_level_str.lower()
    if level_name not in _level_names:
        level_name = "warning"
    log_level = getattr(logging, level_name.upper())
    target = stream or sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=_renderer_colors(target)),
            foreign_pre_chain=[structlog.stdlib.add_log_level],
        )
    )

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(log_level)
    # keeps events off the root logger's handlers.
    app_logger.propagate = False

    structlog.get_logger(__name__).debug("logging_configured", level=level_name)
