"""Editor launch — argument conventions per editor and the step line heuristic."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from lhpipe.core.errors import EditorError, PresentError

logger = logging.getLogger(__name__)

# Approximate place after all the parameters when there is no steps: line
FALLBACK_LINE = 161


@dataclass
class Command:
    """An external command to run with the current process's streams."""

    name: str
    args: list[str]

    def cli(self) -> str:
        return shlex.join([self.name, *self.args])


CommandRunner = Callable[[Command], None]


def run_command(command: Command) -> None:
    """Run a command inheriting stdin/stdout/stderr; raise on failure."""
    try:
        subprocess.run([command.name, *command.args], check=True)
    except subprocess.CalledProcessError as e:
        raise EditorError(command.cli(), f"exit status {e.returncode}") from e
    except OSError as e:
        raise EditorError(command.cli(), str(e)) from e


def _idea_args(path: str, line: str) -> list[str]:
    return ["--line", line, path]


def _code_args(path: str, line: str) -> list[str]:
    return ["-g", f"{path}:{line}"]


EDITOR_ARGS: dict[str, Callable[[str, str], list[str]]] = {
    "idea": _idea_args,
    "code": _code_args,
}


def editor_args(editor: str, path: str, line: str) -> list[str]:
    """Arguments to open path at line; unknown editors just get the path."""
    build = EDITOR_ARGS.get(editor)
    if build is None or not line:
        return [path]
    return build(path, line)


def find_first_step_line(path: Path) -> int | None:
    """Return the 1-based line just past the first ``steps:`` key, or None.

    The returned number skips the key itself, so for a key at 0-based
    index ``i`` it is ``i + 2``.
    """
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise PresentError(f"failed to load pipeline file {path}: {e}") from e

    for i, line in enumerate(text.split("\n")):
        if line.strip() == "steps:":
            return i + 2
    logger.info("could not find line with 'steps:'")
    return None


def open_in_editor(path: str, editor: str, line: str = "", runner: CommandRunner = run_command) -> Command:
    """Open ``path`` in ``editor`` positioned near the first step."""
    if not line:
        found = find_first_step_line(Path(path))
        line = str(found if found is not None else FALLBACK_LINE)

    command = Command(name=editor, args=editor_args(editor, path, line))
    logger.debug("running %s", command.cli())
    try:
        runner(command)
    except EditorError:
        raise
    except Exception as e:
        raise EditorError(command.cli(), str(e)) from e
    return command
