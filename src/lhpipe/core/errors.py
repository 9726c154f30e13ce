"""lhpipe error types and utilities."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


def atomic_write(path: Path, content: str) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes to a temporary file in the same directory, fsyncs it,
    then atomically replaces the target path. The result keeps the mode of
    an existing target, or gets the usual 0666 minus umask for a new file.
    """
    path = Path(path)
    mode = _file_mode(path)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    closed = False
    try:
        os.fchmod(fd, mode)
        os.write(fd, content.encode())
        os.fsync(fd)
        os.close(fd)
        closed = True
        os.replace(tmp, str(path))
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def _file_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class LhpipeError(Exception):
    """Base exception for lhpipe."""

    pass


class TriggerLoadError(LhpipeError):
    """Error scanning a .lighthouse directory or reading a triggers.yaml."""

    pass


class ResolveError(LhpipeError):
    """Error resolving a pipeline source file into its effective form."""

    pass


class SelectionError(LhpipeError):
    """Nothing was selected, or a selection could not be made."""

    pass


class InvalidOptionError(LhpipeError):
    """An explicit option value did not match any available choice."""

    def __init__(self, option: str, value: str, choices: list[str]):
        self.option = option
        self.value = value
        self.choices = list(choices)
        super().__init__(
            f"invalid option: --{option} {value} available names {', '.join(self.choices)}"
        )


class PresentError(LhpipeError):
    """Error serializing, saving or scanning an effective pipeline file."""

    pass


class EditorError(LhpipeError):
    """The editor process could not be launched or exited with an error."""

    def __init__(self, command_line: str, reason: str = ""):
        self.command_line = command_line
        msg = f"failed to open editor via command: {command_line}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
