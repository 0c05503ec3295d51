"""Implementation of the 'generate' command.

The generate command renders a release JSON document as markdown.
"""

from __future__ import annotations

import sys
from importlib import resources
from typing import TYPE_CHECKING

from rich.markup import escape

from release_maker.core.changelog import generate_changelog
from release_maker.core.release import read_release
from release_maker.exceptions import ReleaseMakerError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def read_text_resource(name: str) -> str:
    """Read one of the bundled help texts."""
    return resources.files("release_maker.texts").joinpath(name).read_text(encoding="utf-8")


def run_generate(
    path: Path | None,
    example: bool,
    explain: bool,
    gotchas: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the generate command.

    When any of the help flags is set, the selected texts are printed
    and no release is read.

    Args:
        path: Release JSON file, standard input when None
        example: Print an example input
        explain: Print an explanation of the input and output
        gotchas: Print gotchas of the output
        console: Console for standard output
        err_console: Console for error output
    """
    texts = [
        name
        for name, selected in (
            ("example.json", example),
            ("explanation.txt", explain),
            ("gotchas.txt", gotchas),
        )
        if selected
    ]

    # Raw stream: output is emitted verbatim
    if texts:
        console.file.write("\n".join(read_text_resource(name) for name in texts))
        return

    try:
        if path is None:
            release = read_release(sys.stdin)
        else:
            with path.open(encoding="utf-8") as f:
                release = read_release(f)
        changelog = generate_changelog(release)
    except OSError as e:
        err_console.print(f"[red]Error reading {escape(str(path))}:[/] {escape(str(e))}")
        raise SystemExit(1) from e
    except ReleaseMakerError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.file.write(changelog + "\n")
