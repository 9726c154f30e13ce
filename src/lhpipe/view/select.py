"""Selection — pick a trigger and a pipeline from flags or interactively."""

from __future__ import annotations

from typing import Protocol

import click
from rich.console import Console
from rich.markup import escape

from lhpipe.core.errors import InvalidOptionError, SelectionError


class Input(Protocol):
    """Interactive pick-list collaborator."""

    def pick_name_with_default(self, names: list[str], message: str, default: str, help: str) -> str: ...


class ClickInput:
    """Numbered pick-list on the terminal.

    Answers may be the item number or the exact name. An empty answer, EOF
    or Ctrl-C cancels and returns "".
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True, soft_wrap=True)

    def pick_name_with_default(self, names: list[str], message: str, default: str, help: str) -> str:
        if help:
            self.console.print(f"[dim]{escape(help)}[/dim]", highlight=False)
        for i, name in enumerate(names, start=1):
            self.console.print(f"  [bold]{i}[/bold]) {escape(name)}", highlight=False)

        while True:
            try:
                answer = click.prompt(
                    message.rstrip().rstrip(":"),
                    default=default,
                    show_default=bool(default),
                    err=True,
                )
            except click.Abort:
                return ""

            answer = str(answer).strip()
            if not answer:
                return ""
            if answer in names:
                return answer
            if answer.isdigit() and 1 <= int(answer) <= len(names):
                return names[int(answer) - 1]
            self.console.print(f"[yellow]Not a valid choice:[/yellow] {escape(answer)}", highlight=False)


class BatchInput:
    """Input used with --batch-mode: never prompts."""

    def pick_name_with_default(self, names: list[str], message: str, default: str, help: str) -> str:
        raise SelectionError(
            f"cannot prompt in batch mode ({message.strip()} {', '.join(names)})"
        )


def pick_name(
    name: str,
    candidates: list[str],
    *,
    option: str,
    prompt: str,
    help: str,
    input: Input,
    what: str,
) -> str:
    """Return ``name`` if it is a candidate, or ask the user to pick one.

    An explicit name that is not a candidate raises InvalidOptionError listing
    every candidate. With no name, an empty pick raises
    ``SelectionError("no <what> selected")``.
    """
    if name:
        if name not in candidates:
            raise InvalidOptionError(option, name, candidates)
        return name

    try:
        picked = input.pick_name_with_default(candidates, prompt, "", help)
    except SelectionError:
        raise
    except Exception as e:
        raise SelectionError(f"failed to pick {what}: {e}") from e

    if not picked:
        raise SelectionError(f"no {what} selected")
    if picked not in candidates:
        raise InvalidOptionError(option, picked, candidates)
    return picked
