"""Effective command — lhpipe effective (alias: dump)."""

from __future__ import annotations

import click
from rich.markup import escape

from lhpipe.cli.main import console

EXAMPLES = """
\b
Examples:
  # View the effective pipeline
  lhpipe effective

\b
  # View the effective pipeline in VS Code
  lhpipe effective -e code

\b
  # View the effective pipeline in IDEA
  lhpipe effective -e idea

\b
  # Open in VS Code by default
  export JX_EDITOR="code"
  lhpipe effective
"""


@click.command(epilog=EXAMPLES)
@click.option("-t", "--trigger", "trigger_name", default="",
              help="The path to the trigger file. If not specified you will be prompted to choose one")
@click.option("-p", "--pipeline", "pipeline_name", default="",
              help="The pipeline kind and name. e.g. 'presubmit/pr' or 'postsubmit/release'. "
                   "If not specified you will be prompted to choose one")
@click.option("-o", "--out", "out_file", default="",
              help="The output file to write the effective pipeline to. If not specified output to the terminal")
@click.option("-e", "--editor", default="",
              help="The editor to open the effective pipeline inside. e.g. use 'idea' or 'code'")
@click.option("--line", type=click.IntRange(min=1), default=None, help="The line number to open the editor at")
@click.option("-r", "--recursive", is_flag=True,
              help="Recursively find all '.lighthouse' folders such as if linting a Pipeline Catalog")
@click.option("-d", "--dir", "dir", default=".", type=click.Path(file_okay=False),
              help="The root directory containing the .lighthouse folder")
@click.option("--cache-dir", default=None, type=click.Path(file_okay=False),
              help="Directory holding checked out step libraries for uses: references")
@click.option("-b", "--batch-mode", is_flag=True, help="Never prompt; fail if a choice is needed")
def effective(
    trigger_name: str,
    pipeline_name: str,
    out_file: str,
    editor: str,
    line: int | None,
    recursive: bool,
    dir: str,
    cache_dir: str | None,
    batch_mode: bool,
):
    """Displays the effective tekton pipeline."""
    from lhpipe.config import get_settings
    from lhpipe.core.config import EffectiveOptions
    from lhpipe.core.errors import LhpipeError
    from lhpipe.effective import EffectiveCommand

    options = EffectiveOptions.from_settings(
        get_settings(),
        dir=dir,
        trigger_name=trigger_name,
        pipeline_name=pipeline_name,
        out_file=out_file,
        editor=editor,
        line=str(line) if line is not None else "",
        recursive=recursive,
        batch_mode=batch_mode,
        cache_dir=cache_dir,
    )

    try:
        EffectiveCommand(options).run()
    except LhpipeError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise SystemExit(1) from e
