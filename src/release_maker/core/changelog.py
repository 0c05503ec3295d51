"""Markdown changelog generation from a Release.

The output is deterministic and uses reference-style links, so the
body stays readable while every author mention and commit reference
is still clickable on GitHub::

    Thanks to the following for their contributions:

    - [@alice]

    ### Added

    - [feature] Fast parser ([@alice]) [c:1234567]

    [@alice]: https://github.com/alice

    [c:1234567]: https://github.com/o/r/commit/1234567...
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from release_maker.exceptions import EmptyCategoryError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import TextIO

    from release_maker.core.release import Change, Release

logger = logging.getLogger(__name__)

GITHUB_URL = "https://github.com"

THANKS_HEADER = "Thanks to the following for their contributions:"

SECTION_HEADINGS = {
    "added": "### Added",
    "changed": "### Changed",
    "fixed": "### Fixed",
    "removed": "### Removed",
}


def generate_changelog(release: Release) -> str:
    """Render a release as markdown.

    Args:
        release: Release to render

    Returns:
        Markdown text ending with a newline

    Raises:
        EmptyCategoryError: If a change has an empty category
    """
    buffer = io.StringIO()
    write_changelog(buffer, release)
    return buffer.getvalue()


def write_changelog(sink: TextIO, release: Release) -> None:
    """Render a release as markdown into ``sink``.

    Authors are listed once each, sorted case-insensitively. Commit
    links are not deduplicated: a commit shared by several changes gets
    one link line per reference.

    Raises:
        EmptyCategoryError: If a change has an empty category
    """
    authors = sorted(release.unique_authors(), key=lambda author: author.name.lower())
    commits = release.all_commits()

    sink.write(f"{THANKS_HEADER}\n\n")
    for author in authors:
        sink.write(f"- {author}\n")
    sink.write("\n")

    for section, changes in release.sections():
        _write_section(sink, SECTION_HEADINGS[section], changes)

    for author in authors:
        sink.write(f"{author}: {GITHUB_URL}/{author.name}\n")
    sink.write("\n")

    for commit in commits:
        sink.write(f"{commit}: {release.repo_url}/commit/{commit.hash}\n")

    logger.debug("Rendered %d authors and %d commit links", len(authors), len(commits))


def _write_section(sink: TextIO, heading: str, changes: list[Change]) -> None:
    # Empty sections are omitted entirely
    if not changes:
        return

    sink.write(f"{heading}\n\n")

    for change in changes:
        if not change.category:
            raise EmptyCategoryError(f"Change {change.name!r} has an empty category")

        sink.write(
            f"- [{change.category}] {change.name} "
            f"({_join(change.authors)}) {_join(change.commits)}\n"
        )

    sink.write("\n")


def _join(items: Iterable[object]) -> str:
    return " ".join(str(item) for item in items)
