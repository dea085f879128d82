"""Command-line interface for mediawalk.

This package provides the Typer app and global console used by all CLI
commands.

- app: The Typer application object. Commands are registered on it in
  ``mediawalk.cli.commands``, which is also the console-script entry point.
- console: Rich Console instance for messages that are not part of a
  command's managed output.
"""

import os

import typer
from rich.console import Console

from mediawalk.cli.console import ENV_DISABLE_RICH
from mediawalk.utils.debug import setup_logger

console = Console()

app = typer.Typer(
    name="mediawalk",
    help="Find audio, image and video files by their content.",
    add_completion=False,
)


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the MEDIAWALK_NO_RICH environment variable."
        ),
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output from the walker."
    ),
) -> None:
    """Top-level CLI callback adding global options."""
    if no_rich:
        os.environ[ENV_DISABLE_RICH] = "1"
    setup_logger(verbose=verbose)
