"""Logging setup for the rubberduck package.

Configures the ``rubberduck`` parent logger so every module logger
(rubberduck.context.selector, rubberduck.context.router, ...) inherits the
handler and level.
"""

import logging

_logging_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the rubberduck logger. Idempotent.

    Raises:
        ValueError: If level is not a standard logging level name.
    """
    global _logging_configured
    if _logging_configured:
        return

    numeric_level = logging.getLevelNamesMapping().get(level.upper())
    if numeric_level is None:
        raise ValueError(f"Unknown log level: {level!r}")
    _logging_configured = True

    parent_logger = logging.getLogger("rubberduck")
    parent_logger.setLevel(numeric_level)
    parent_logger.propagate = False

    console = logging.StreamHandler()
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    parent_logger.addHandler(console)
