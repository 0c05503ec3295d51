"""Typer application wiring the release-maker commands."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from release_maker import __version__
from release_maker.cli.commands.generate import run_generate
from release_maker.cli.commands.retrieve import run_retrieve

app = typer.Typer(
    name="release-maker",
    help="A utility tool to quickly create changelogs for GitHub releases.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging(verbose)


@app.command()
def retrieve(
    path: Path = typer.Argument(Path("."), help="Path to directory of a Git repository."),
    branch: str | None = typer.Option(
        None,
        "--branch",
        "-b",
        help="Branch to retrieve commits from. Defaults to the configured default branch.",
    ),
    start: str | None = typer.Option(
        None, "--start", "-s", help="Commit hash defining the start boundary of the list."
    ),
    end: str | None = typer.Option(
        None,
        "--end",
        "-e",
        help="Commit hash defining the (inclusive) end boundary. "
        "Without it, all commits from the start are listed.",
    ),
) -> None:
    """Retrieve Git commits of a branch as JSON for the [cyan]generate[/] command."""
    run_retrieve(path, branch, start, end, console=Console(), err_console=Console(stderr=True))


@app.command()
def generate(
    path: Path | None = typer.Argument(
        None, help="Path to the release JSON. Standard input is used when absent."
    ),
    example: bool = typer.Option(False, "--example", help="Print example input."),
    explain: bool = typer.Option(
        False, "--explain", help="Print an explanation of the input and the generated output."
    ),
    gotchas: bool = typer.Option(False, "--gotchas", help="Print gotchas of the output."),
) -> None:
    """Generate markdown release notes from JSON input."""
    run_generate(
        path,
        example,
        explain,
        gotchas,
        console=Console(),
        err_console=Console(stderr=True),
    )


def main() -> None:
    app()
