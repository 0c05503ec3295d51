"""Building a draft Release from extracted commits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from release_maker.core.release import Change, Release
from release_maker.exceptions import CommitFieldMissingError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from release_maker.vcs.git import CommitRecord

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "any"


def release_from_commits(
    repo_url: str,
    commits: Iterable[CommitRecord],
    category: str = DEFAULT_CATEGORY,
) -> Release:
    """Create a release listing every commit as an added change.

    The result is meant to be edited by hand: changes are moved to their
    proper section, recategorized and merged before generating notes.
    Commits without author or committer identity are skipped with a warning.

    Args:
        repo_url: URL of the repository, used for commit links
        commits: Commits in the order they should appear
        category: Placeholder category for every change

    Returns:
        Release with one change per commit in ``added``
    """
    return Release(
        repo_url=repo_url,
        added=[
            Change.single(category, commit.message, commit.author.name, commit.hash)
            for commit in _complete_commits(commits)
        ],
    )


def _complete_commits(commits: Iterable[CommitRecord]) -> Iterator[CommitRecord]:
    iterator = iter(commits)
    while True:
        try:
            commit = next(iterator)
        except StopIteration:
            return
        except CommitFieldMissingError as e:
            logger.warning("Skipping commit: %s", e.message)
            continue
        yield commit
