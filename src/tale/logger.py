"""Logging helpers for Tale.

Example:
    >>> from tale.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scanning %s", "intro.tale")
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name, namespaced under ``tale.``.

    Example:
        >>> get_logger("cli").name
        'tale.cli'
    """
    if not (name == "tale" or name.startswith("tale.")):
        name = f"tale.{name}"
    return logging.getLogger(name)


def configure(verbose: bool = False, stream: TextIO | None = None) -> None:
    """Send ``tale.*`` log records to stderr; DEBUG when *verbose*, WARNING otherwise."""
    root = logging.getLogger("tale")
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not root.handlers:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
