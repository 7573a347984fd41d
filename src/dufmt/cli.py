"""CLI interface for dufmt."""

import sys
from typing import NoReturn, Optional

import typer
from rich.markup import escape

from dufmt import __version__
from dufmt.analyzer import summarize
from dufmt.config import load_settings
from dufmt.dircolors import get_color_database, run_dircolors
from dufmt.display import console, err_console, should_colorize, write_report
from dufmt.errors import BadArgumentError, DufmtError
from dufmt.log import setup_logger
from dufmt.models import ColorMode
from dufmt.paths import resolve_paths
from dufmt.report import run_du

app = typer.Typer(
    name="dufmt",
    help="Print the disk usage ordered by size with human readable output.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"dufmt version {__version__}")
        raise typer.Exit()


def fail(message: str) -> NoReturn:
    """Print a diagnostic and exit non-zero."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


@app.command()
def main(
    paths: Optional[list[str]] = typer.Argument(
        None,
        help="Files and dirs to report on. Defaults to the entries of the current dir; "
        "a single dir reports on its entries.",
        show_default=False,
    ),
    color: Optional[ColorMode] = typer.Option(
        None,
        "--color",
        help="Surround paths with escape sequences to display them in color "
        "on the terminal. [default: auto]",
        case_sensitive=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug diagnostics."),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Print the disk usage ordered by size with human readable output.

    Example: print the usage for all files and dirs in the current dir:

        dufmt
    """
    setup_logger(verbose)
    settings = load_settings()
    mode = color or settings.color

    try:
        targets = resolve_paths(paths or [])
    except BadArgumentError as e:
        fail(f"Bad args: {e}")

    try:
        report = summarize(targets, source=lambda p: run_du(p, settings.du_command))

        database = None
        if should_colorize(mode, sys.stdout):
            database = get_color_database(
                settings.colors_env_var,
                lambda: run_dircolors(settings.dircolors_command),
            )
        write_report(report, sys.stdout, mode=mode, database=database)
    except DufmtError as e:
        fail(str(e))


if __name__ == "__main__":
    app()
