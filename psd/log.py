"""Logging setup for the ``psd`` namespace.

Results go to stdout; everything routed through these loggers goes to
stderr so it never mixes with the divergence values.
"""

from __future__ import annotations

import logging

CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure the ``psd`` logger with a single stderr handler.

    Safe to call more than once: existing handlers are replaced.
    """
    app_logger = logging.getLogger("psd")
    app_logger.setLevel(level)
    for h in list(app_logger.handlers):
        app_logger.removeHandler(h)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console)

    # Do not propagate to root to avoid double-printing
    app_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger under the 'psd' root."""
    if name.startswith("psd"):
        return logging.getLogger(name)
    return logging.getLogger(f"psd.{name}")


def level_from_verbosity(verbose: int = 0, quiet: bool = False) -> int:
    """Map ``-v``/``-q`` counts to a logging level."""
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING
