"""CLI commands for mediawalk.

This module implements the user-facing commands:
- scan: walk a directory and print every file as soon as it is classified.
- version: show the installed version.
- config get/set: read or persist settings in config.toml.

Design:
- Options left unset on the command line fall back to MEDIAWALK_* environment
  variables, then config.toml, then built-in defaults (see utils/config.py).
- Exit codes are defined as an Enum.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Dict, List, Optional

import typer

from mediawalk.cli import app, console
from mediawalk.cli.console import ConsoleManager
from mediawalk.cli.renderer import (
    WalkSummary,
    render_json_line,
    render_result,
    render_summary,
)
from mediawalk.core.walker import start_walking
from mediawalk.models.core import MediaCategory, WalkOutcome, WalkResult
from mediawalk.utils.config import (
    DEFAULTS,
    coerce_value,
    resolve_setting,
    set_config_value,
)


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    FAILURES = 2


def validate_media_type(value: str) -> MediaCategory:
    """Validate and convert a string to a MediaCategory.

    Raises:
        typer.BadParameter: If the value is not audio, image or video.
    """
    try:
        return MediaCategory(value.lower())
    except ValueError:
        valid = ", ".join(c.value for c in MediaCategory)
        raise typer.BadParameter(f"Invalid media type. Must be one of: {valid}")


ROOT_PATH = Annotated[
    Path,
    typer.Argument(help="Directory to walk. A missing directory yields no results."),
]

MEDIA_TYPE = Annotated[
    Optional[List[str]],
    typer.Option(
        "--type",
        "-t",
        help="Only show matched files of these types (audio, image, video).",
    ),
]

FOLLOW_LINKS = Annotated[
    Optional[bool],
    typer.Option(
        "--follow-links/--no-follow-links",
        help="Follow symbolic links while walking [default: follow].",
        show_default=False,
    ),
]

QUEUE_SIZE = Annotated[
    Optional[int],
    typer.Option(
        "--queue-size",
        min=0,
        help="Maximum number of pending results, 0 for unbounded [default: 0].",
        show_default=False,
    ),
]

JSON_OUTPUT = Annotated[
    Optional[bool],
    typer.Option(
        "--json/--no-json",
        help="Print one JSON object per file instead of styled lines.",
        show_default=False,
    ),
]

ONLY_MEDIA = Annotated[
    bool,
    typer.Option(
        "--only-media",
        help="Hide files that are not audio, image or video.",
    ),
]

NO_COLOR = Annotated[
    bool,
    typer.Option(
        "--no-color",
        help="Disable colored output",
    ),
]


def _should_show(
    result: WalkResult, categories: List[MediaCategory], only_media: bool
) -> bool:
    if result.outcome is WalkOutcome.NO_MATCH:
        return not only_media and not categories
    if result.outcome is WalkOutcome.MATCHED and categories:
        return result.category in categories
    return True


@app.command()
def scan(  # noqa: PLR0913
    root: ROOT_PATH,
    media_type: MEDIA_TYPE = None,
    follow_links: FOLLOW_LINKS = None,
    queue_size: QUEUE_SIZE = None,
    json_output: JSON_OUTPUT = None,
    only_media: ONLY_MEDIA = False,
    no_color: NO_COLOR = False,
) -> None:
    """Walk ROOT and report every file as soon as it is classified."""
    try:
        categories = [validate_media_type(mt) for mt in media_type or []]
    except typer.BadParameter as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    follow = resolve_setting(
        "walk.follow_links", default=True, cli_value=follow_links
    )
    bound = resolve_setting("walk.queue_size", default=0, cli_value=queue_size)
    as_json = resolve_setting("output.json", default=False, cli_value=json_output)
    if bound < 0:
        console.print(f"[red]Error: walk.queue_size must be >= 0, got {bound}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    summary = WalkSummary()
    by_category: Dict[MediaCategory, int] = {}
    exit_code = ExitCode.SUCCESS

    with ConsoleManager(no_color=no_color) as out:
        try:
            with start_walking(root, follow_links=follow, queue_size=bound) as stream:
                for result in stream:
                    summary.add(result)
                    if result.category is not None:
                        by_category[result.category] = (
                            by_category.get(result.category, 0) + 1
                        )
                    if not _should_show(result, categories, only_media):
                        continue
                    if as_json:
                        render_json_line(result)
                    else:
                        render_result(result, out)
        except Exception as e:
            out.print(f"[red]Error: An unexpected error occurred: {e}[/red]")
            out.print_exception()
            exit_code = ExitCode.ERROR
        else:
            if not as_json:
                if summary.total == 0:
                    out.print("[yellow]No files found.[/yellow]")
                render_summary(summary, out, by_category)
            if summary.failed:
                exit_code = ExitCode.FAILURES

    if exit_code is not ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


@app.command()
def version() -> None:
    """Show the version of mediawalk."""
    from mediawalk.__about__ import __version__

    console.print(f"mediawalk version: [bold]{__version__}[/bold]")


config_app = typer.Typer(help="Read or change persistent settings.")
app.add_typer(config_app, name="config")


def _check_key(key: str) -> None:
    if key not in DEFAULTS:
        known = ", ".join(sorted(DEFAULTS))
        console.print(f"[red]Error: Unknown setting {key!r}. Known settings: {known}[/red]")
        raise typer.Exit(ExitCode.ERROR)


@config_app.command("get")
def config_get(key: Annotated[str, typer.Argument(help="Dotted setting name")]) -> None:
    """Show the effective value of a setting."""
    _check_key(key)
    value = resolve_setting(key, default=DEFAULTS[key])
    console.print(f"{key} = {value!r}", markup=False)


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Dotted setting name")],
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Persist a setting in config.toml."""
    _check_key(key)
    coerced = coerce_value(value, DEFAULTS[key])
    set_config_value(key, coerced)
    console.print(f"{key} = {coerced!r}", markup=False)


def main() -> None:
    """Main entry point for the CLI."""
    app()
