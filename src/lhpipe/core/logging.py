"""Logging setup and verbosity levels for lhpipe."""

from __future__ import annotations

import logging
from enum import IntEnum

from rich.console import Console
from rich.logging import RichHandler


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # notices and errors only
    VERBOSE = 1   # + directory scans, resolver calls


def setup_logging(verbosity: Verbosity = Verbosity.DEFAULT, console: Console | None = None) -> None:
    """Route lhpipe log records to stderr through Rich.

    stdout is reserved for the effective pipeline YAML.
    """
    level = logging.DEBUG if verbosity >= Verbosity.VERBOSE else logging.INFO
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbosity >= Verbosity.VERBOSE,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="%H:%M:%S"))

    root = logging.getLogger("lhpipe")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
