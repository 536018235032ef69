"""Shared logger initialization for the CLI and the tool server.

Usage:
    from tudidi_cli.utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"  # rich handler already adds time & level

# stderr only: stdout carries the stdio tool transport
_handler: Optional[RichHandler] = None


def configure_logging(level: int = logging.INFO) -> None:
    """Idempotently configure the root logger with a rich stderr handler."""
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=False)
        _handler.setFormatter(logging.Formatter(_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)
    root.setLevel(level)
    _handler.setLevel(level)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger."""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
