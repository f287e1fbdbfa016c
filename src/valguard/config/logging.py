"""structlog output for the ``valguard`` logger tree.

The library never configures logging on import, and configuring it never
touches the root logger: the host application owns that. Calling
:func:`configure_logging` attaches one stderr handler to the ``valguard``
logger and stops its records from propagating, so the host's handlers,
levels and formatters stay as they were.

Two output modes:
- Human (default): console output to stderr, colored on a TTY
- JSON (log_json=True): structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from valguard.config.settings import ValguardSettings

LOGGER_NAME = "valguard"
HANDLER_NAME = "valguard.stderr"

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    propagate: bool = False,
) -> logging.Logger:
    """Route the ``valguard`` logger tree to stderr through structlog.

    Repeated calls replace the previously installed handler. structlog
    itself is only configured when the host has not done so already.

    Args:
        verbose: Emit valguard DEBUG records. When False, only WARNING+.
        log_json: Render JSON lines instead of console output.
        propagate: Also pass valguard records up to the host's handlers.

    Returns:
        The configured ``valguard`` logger.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                *_PRE_CHAIN,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = propagate
    return logger


def configure_from_settings(settings: ValguardSettings) -> logging.Logger:
    """Apply the ``[logging]`` section of *settings*."""
    section = settings.logging
    return configure_logging(verbose=section.verbose, log_json=section.log_json)
