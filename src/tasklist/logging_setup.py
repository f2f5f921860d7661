"""
Diagnostic logging for the tasklist command.
"""

from __future__ import annotations

import logging
import sys


class _PackageFilter(logging.Filter):
    """Pass tasklist records; other libraries only at ERROR and above."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "tasklist" or record.name.startswith("tasklist."):
            return True
        return record.levelno >= logging.ERROR


def configure_logging(verbose: bool = False) -> None:
    """
    Route log records to stderr.

    Parameters
    ----------
    verbose : bool, optional
        Emit DEBUG records when True; otherwise only WARNING and above.

    Returns
    -------
    None
        The root logger is reconfigured in place.
    """
    root = logging.getLogger()
    level = logging.DEBUG if verbose else logging.WARNING
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler.addFilter(_PackageFilter())
    root.addHandler(handler)
