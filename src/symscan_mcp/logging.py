"""Structured logging setup.

All output goes to stderr: stdout carries the MCP stdio protocol.
"""

import logging
import sys

import structlog

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(level: str = "WARNING", json_format: bool = False) -> None:
    """Route structlog through stdlib logging to stderr.

    Args:
        level: Log level name
        json_format: Render JSON lines instead of the console format
    """
    default_level = _LEVEL_MAP.get(level.upper(), logging.WARNING)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Don't cache - allows reconfiguration and respects level changes
        cache_logger_on_first_use=False,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(default_level)

    # Silence noisy upstream MCP SDK loggers
    logging.getLogger("mcp.server.lowlevel.server").setLevel(logging.WARNING)


def get_logger(name: str):
    """structlog logger writing through the stdlib logger `name`.

    Until configure_logging runs, stdlib level filtering and its stderr
    fallback handler apply, so library use never prints to stdout.
    """
    return structlog.wrap_logger(logging.getLogger(name))
