"""Logging setup for hosts and the sessionreel CLI."""

import logging
import sys

_ROOT_LOGGER = "sessionreel"


def configure_logging(
    level: int | str = logging.INFO,
    fmt: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
) -> None:
    """Route sessionreel log records to stderr.

    Library modules only create ``logging.getLogger(__name__)`` loggers and
    never attach handlers, so an embedding host keeps full control. This
    helper is for the CLI and for hosts without their own setup: it attaches
    one stderr handler to the ``sessionreel`` logger the first time and only
    adjusts the level afterwards. Stdout is left to CLI output.

    Args:
        level: Numeric level or a level name such as ``"debug"``
        fmt: Log format string
    """
    package_logger = logging.getLogger(_ROOT_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        package_logger.addHandler(handler)
    if isinstance(level, str):
        level = level.upper()
    package_logger.setLevel(level)
