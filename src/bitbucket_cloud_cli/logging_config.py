"""structlog on top of stdlib logging.

Library modules log through :func:`get_logger`, which hands structlog events
to the ``bitbucket_cloud_cli`` stdlib logger. That logger only carries a
``NullHandler``, so nothing is printed until the application configures
logging (the CLI does it with :func:`configure_logging`).
"""

import logging
import sys
from typing import Any

import structlog

PACKAGE_LOGGER = "bitbucket_cloud_cli"

_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the stdlib logger ``name``.

    Independent of ``structlog.configure``; the host application's stdlib
    logging setup decides what is emitted and where.

    Example:
        >>> log = get_logger(__name__)
        >>> log.warning("pull_request_state_fallback", invalid=["BOGUS"])
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


class StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__()

    @property
    def stream(self) -> Any:
        return sys.stderr

    @stream.setter
    def stream(self, value: Any) -> None:
        pass


def configure_logging(level: str = "WARNING") -> None:
    """Render package events to stderr, dropping those below ``level``."""
    log_level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)

    handler = StderrHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
        )
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in [h for h in logger.handlers if isinstance(h, StderrHandler)]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(log_level)
