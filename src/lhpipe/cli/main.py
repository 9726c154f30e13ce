"""lhpipe CLI — main entry point and shared utilities."""

from __future__ import annotations

import click
from rich.console import Console

from lhpipe.core.logging import Verbosity, setup_logging

# Notices and errors go to stderr; stdout carries only pipeline YAML.
console = Console(stderr=True, soft_wrap=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="lhpipe", prog_name="lhpipe")
def main(verbose: bool):
    """lhpipe — inspect the effective Tekton pipelines of lighthouse triggers."""
    setup_logging(Verbosity.VERBOSE if verbose else Verbosity.DEFAULT, console)


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from lhpipe.cli.effective_commands import effective  # noqa: E402

main.add_command(effective)
main.add_command(effective, name="dump")
