"""Version control access."""

from __future__ import annotations

from release_maker.vcs.git import Author, CommitRangeWalker, CommitRecord, Repository

__all__ = [
    "Author",
    "CommitRangeWalker",
    "CommitRecord",
    "Repository",
]
