"""Logging bootstrap shared by the server and the CLI entry points."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


__all__ = ["configure_logging", "LOG_FORMAT"]
