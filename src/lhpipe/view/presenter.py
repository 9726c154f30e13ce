"""Presentation — print, save, or open the effective pipeline."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.markup import escape

from lhpipe.core.config import EffectiveOptions
from lhpipe.core.errors import PresentError, atomic_write
from lhpipe.triggers.model import Trigger
from lhpipe.view.editor import CommandRunner, open_in_editor, run_command

logger = logging.getLogger(__name__)

# Base name for temp files when the root directory has no usable name
DEFAULT_TEMP_NAME = "jx-pipeline"


def to_yaml(document: dict) -> str:
    """Serialize a pipeline document as block-style YAML, keeping key order."""
    return yaml.safe_dump(document, default_flow_style=False, sort_keys=False, allow_unicode=True)


def temp_file_prefix(root_dir: Path, name: str) -> str:
    """Prefix for the temp file: ``<root dir name>-<name with / as ->-``."""
    base = Path(os.path.abspath(root_dir)).name
    if len(base) <= 1:
        base = DEFAULT_TEMP_NAME
    safe_name = name.replace(os.sep, "-").replace("/", "-")
    return f"{base}-{safe_name}-"


def temp_output_path(root_dir: Path, name: str) -> str:
    """Create a uniquely named empty ``.yaml`` temp file and return its path."""
    try:
        fd, path = tempfile.mkstemp(prefix=temp_file_prefix(root_dir, name), suffix=".yaml")
    except OSError as e:
        raise PresentError(f"failed to create temp file: {e}") from e
    os.close(fd)
    return path


class Presenter:
    """Renders one resolved pipeline according to the run's options."""

    def __init__(
        self,
        options: EffectiveOptions,
        console: Console | None = None,
        runner: CommandRunner = run_command,
    ):
        self.options = options
        self.console = console or Console(stderr=True, soft_wrap=True)
        self.runner = runner

    def display(self, trigger: Trigger, name: str, document: dict) -> None:
        options = self.options
        if options.editor and not options.out_file:
            options.out_file = temp_output_path(options.root_dir, name)

        if options.out_file:
            self.save(document, options.out_file)
            if options.editor:
                open_in_editor(options.out_file, options.editor, options.line, self.runner)
            return

        try:
            data = to_yaml(document)
        except yaml.YAMLError as e:
            raise PresentError(f"failed to marshal pipeline for {name}: {e}") from e

        self.console.print(
            f"trigger [cyan]{escape(trigger.path)}[/cyan] pipeline [cyan]{escape(name)}[/cyan]",
            highlight=False,
        )
        click.echo(data, nl=False)

    def save(self, document: dict, path: str) -> None:
        try:
            atomic_write(Path(path), to_yaml(document))
        except (OSError, yaml.YAMLError) as e:
            raise PresentError(f"failed to save file {path}: {e}") from e
        logger.debug("wrote %s", path)
        self.console.print(f"saved file [cyan]{escape(str(path))}[/cyan]", highlight=False)
