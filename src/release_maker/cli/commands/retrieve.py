"""Implementation of the 'retrieve' command.

The retrieve command walks a branch and prints a draft release as JSON,
ready to be edited and passed to 'generate'.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.markup import escape

from release_maker.config import load_config
from release_maker.core.release import dumps_release
from release_maker.core.retrieve import release_from_commits
from release_maker.exceptions import ReleaseMakerError
from release_maker.vcs import Repository

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

logger = logging.getLogger(__name__)


def run_retrieve(
    path: Path,
    branch: str | None,
    start: str | None,
    end: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the retrieve command.

    Args:
        path: Path to the Git repository
        branch: Branch to walk, defaults to the configured default branch
        start: Hash of the first commit to list
        end: Hash of the last commit to list (inclusive)
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        config = load_config(path)
    except ReleaseMakerError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    branch = branch or config.default_branch
    logger.debug("Retrieving %s/%s from %s", config.remote, branch, path)

    try:
        repo = Repository.open(path)
        commits = repo.commits(branch, remote=config.remote)

        if start is not None:
            commits = commits.start(start)

        if end is not None:
            commits = commits.end(end)

        release = release_from_commits(repo.url(config.remote), commits, config.category)
    except ReleaseMakerError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    logger.info("Retrieved %d commits", len(release.added))
    console.file.write(dumps_release(release) + "\n")
