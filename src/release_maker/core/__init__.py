"""Core business logic for release-maker.

This module contains the fundamental building blocks:
- Release data model with its JSON encoding
- Markdown changelog generation
- Draft releases built from extracted commits
"""

from __future__ import annotations

from release_maker.core.changelog import generate_changelog, write_changelog
from release_maker.core.release import (
    Author,
    Change,
    CommitRef,
    FlexibleList,
    Release,
    dumps_release,
    load_release,
    read_release,
)
from release_maker.core.retrieve import release_from_commits

__all__ = [
    # Release model
    "Author",
    "Change",
    "CommitRef",
    "FlexibleList",
    "Release",
    "dumps_release",
    # Changelog
    "generate_changelog",
    "load_release",
    "read_release",
    # Retrieval
    "release_from_commits",
    "write_changelog",
]
