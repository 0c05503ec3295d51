"""Shared fixtures for release-maker tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pygit2
import pytest

from release_maker.core.release import Change, Release

if TYPE_CHECKING:
    from pathlib import Path

REPO_URL = "https://github.com/o/r"

BASE_TIME = 1_700_000_000


@dataclass
class RepoFixture:
    """A repository on disk and the hashes of interesting commits."""

    path: Path
    commits: dict[str, str]


def _signature(name: str, offset: int) -> pygit2.Signature:
    return pygit2.Signature(name, f"{name.lower()}@example.com", BASE_TIME + offset, 0)


def _publish(repo: pygit2.Repository, branch: str, tip: pygit2.Oid) -> None:
    repo.references.create(f"refs/remotes/origin/{branch}", tip)
    repo.remotes.create("origin", REPO_URL)


@pytest.fixture
def linear_repo(tmp_path: Path) -> RepoFixture:
    """Bare repository with c1 <- c2 <- c3, c3 being origin/master."""
    path = tmp_path / "linear.git"
    repo = pygit2.init_repository(str(path), bare=True)
    tree = repo.TreeBuilder().write()

    c1 = repo.create_commit(
        "refs/heads/master",
        _signature("Alice", 1),
        _signature("Carol", 2),
        "Initial commit\n\nSets up the project.",
        tree,
        [],
    )
    c2 = repo.create_commit(
        "refs/heads/master", _signature("Bob", 3), _signature("Bob", 3), "Add parser", tree, [c1]
    )
    c3 = repo.create_commit(
        "refs/heads/master",
        _signature("Alice", 4),
        _signature("Alice", 4),
        "Fix parser\ncrash",
        tree,
        [c2],
    )
    _publish(repo, "master", c3)

    return RepoFixture(path=path, commits={"c1": str(c1), "c2": str(c2), "c3": str(c3)})


@pytest.fixture
def merge_repo(tmp_path: Path) -> RepoFixture:
    """Bare repository with a merge: base <- (left, right) <- merge."""
    path = tmp_path / "merge.git"
    repo = pygit2.init_repository(str(path), bare=True)
    tree = repo.TreeBuilder().write()

    alice = _signature("Alice", 5)
    bob = _signature("Bob", 1)
    first = _signature("Alice", 0)
    base = repo.create_commit(None, first, first, "Base", tree, [])
    left = repo.create_commit(None, alice, alice, "Left", tree, [base])
    right = repo.create_commit(None, bob, bob, "Right", tree, [base])
    merge = repo.create_commit(None, alice, alice, "Merge", tree, [left, right])
    _publish(repo, "main", merge)

    return RepoFixture(
        path=path,
        commits={"base": str(base), "left": str(left), "right": str(right), "merge": str(merge)},
    )


@pytest.fixture
def sample_release() -> Release:
    """Release with changes in every section."""
    return Release(
        repo_url=REPO_URL,
        added=[Change.single("parser", "Parse nested tables", "bob", "1111111aaaa")],
        changed=[Change.single("cli", "Rename --out", "Alice", "2222222bbbb")],
        fixed=[Change.single("docs", "Fix link", "bob", "3333333cccc")],
        removed=[Change.single("api", "Drop v1 endpoint", "carol", "4444444dddd")],
    )
