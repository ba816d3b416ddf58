"""
Logging setup shared by the library, the CLI and the stdio server.

Everything logs through structlog. Output goes to stderr because stdout
carries translated reports (CLI) or protocol frames (stdio server).
"""

import logging
import sys

import structlog


_LOG_FORMATS = ("console", "json")


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        fmt: "console" for human-readable lines, "json" for one JSON object per line

    Raises:
        ValueError: If the level or format is not recognised
    """
    level_name = (level or "INFO").strip().upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    fmt_name = (fmt or "console").strip().lower()
    if fmt_name not in _LOG_FORMATS:
        raise ValueError(f"Unknown log format: {fmt!r} (expected one of {list(_LOG_FORMATS)})")

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt_name == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    logging.basicConfig(stream=sys.stderr, level=numeric_level, format="%(message)s", force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def _install_default() -> None:
    # Library default: route through stdlib so nothing reaches stdout until
    # the application calls configure_logging.
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str):
    return structlog.get_logger(name)


if not structlog.is_configured():
    _install_default()
