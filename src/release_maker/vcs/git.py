"""Read-only access to a Git repository through pygit2.

This module extracts a bounded range of commits from a branch. The
range is described by an optional start commit (where the walk begins)
and an optional inclusive end commit (the last commit yielded).

libgit2's revision walker has no notion of an inclusive end boundary,
so CommitRangeWalker enforces it itself: once the end commit has been
yielded, the walker truncates its cursor and stays exhausted.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pygit2
from pygit2.enums import SortMode

from release_maker.exceptions import (
    CommitFieldMissingError,
    CommitLookupError,
    HashValidationError,
    RefNotFoundError,
    RemoteNotFoundError,
    RepositoryOpenError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)

HEX_HASH_LENGTH = 40

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


@dataclass(frozen=True, slots=True)
class Author:
    """A Git identity, used for both the author and committer of a commit."""

    name: str
    email: str


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A commit extracted from the repository."""

    hash: str
    author: Author
    committer: Author
    message: str


def parse_hash(value: str) -> pygit2.Oid:
    """Convert a boundary hash to an object id.

    Abbreviated hashes are padded with zeros, as libgit2 does. The
    walker expands them against the repository before falling back to
    the padded id.

    Raises:
        HashValidationError: If the hash is empty, longer than 40 characters
            or contains non-hex characters
    """
    if not value:
        raise HashValidationError(value, "hash is empty")
    if len(value) > HEX_HASH_LENGTH:
        raise HashValidationError(value, f"hash is longer than {HEX_HASH_LENGTH} characters")
    if not _HEX_RE.match(value):
        raise HashValidationError(value, "hash contains non-hex characters")

    return pygit2.Oid(hex=value.lower().ljust(HEX_HASH_LENGTH, "0"))


def commit_summary(message: str) -> str:
    """Return the one-line summary of a commit message.

    Mirrors ``git log --format=%s``: the first paragraph with its line
    breaks folded into spaces.
    """
    paragraph = message.lstrip().split("\n\n", 1)[0]
    return " ".join(line.strip() for line in paragraph.splitlines()).strip()


class _WalkState(enum.Enum):
    WALKING = "walking"
    EXHAUSTED = "exhausted"


class CommitRangeWalker:
    """Lazy, topologically ordered sequence of CommitRecord.

    Not safe for concurrent use; a walker is consumed by a single caller.
    """

    def __init__(self, repo: pygit2.Repository, tip: pygit2.Oid) -> None:
        self._repo = repo
        self._walker = repo.walk(tip, SortMode.TOPOLOGICAL)
        self._end: pygit2.Oid | None = None
        self._state = _WalkState.WALKING
        logger.debug("Walking commits from %s", tip)

    @property
    def exhausted(self) -> bool:
        return self._state is _WalkState.EXHAUSTED

    def start(self, commit_hash: str) -> CommitRangeWalker:
        """Restart the walk from ``commit_hash``.

        Raises:
            HashValidationError: If ``commit_hash`` is not a valid hex id
            CommitLookupError: If no commit has this id
        """
        oid = self._resolve(commit_hash)
        self._walker.reset()
        self._walker.sort(SortMode.TOPOLOGICAL)
        try:
            self._walker.push(oid)
        except (KeyError, pygit2.GitError) as e:
            raise CommitLookupError(f"Start commit {commit_hash} not found in repository") from e

        self._state = _WalkState.WALKING
        logger.debug("Walk restarted from %s", oid)
        return self

    def end(self, commit_hash: str) -> CommitRangeWalker:
        """Set the inclusive end boundary. The current cursor is left untouched.

        Raises:
            HashValidationError: If ``commit_hash`` is not a valid hex id
        """
        self._end = self._resolve(commit_hash)
        return self

    def __iter__(self) -> Iterator[CommitRecord]:
        return self

    def __next__(self) -> CommitRecord:
        if self._state is _WalkState.EXHAUSTED:
            raise StopIteration

        try:
            commit = next(self._walker)
        except StopIteration:
            self._truncate()
            raise
        except (KeyError, pygit2.GitError) as e:
            logger.debug("Commit lookup failed, ending walk: %s", e)
            self._truncate()
            raise StopIteration from e

        # Truncate before extracting, so a commit with missing fields still ends the walk
        if commit.id == self._end:
            logger.debug("Reached end boundary %s", self._end)
            self._truncate()

        return _to_record(commit)

    def _truncate(self) -> None:
        self._walker.reset()
        self._state = _WalkState.EXHAUSTED

    def _resolve(self, commit_hash: str) -> pygit2.Oid:
        oid = parse_hash(commit_hash)
        if len(commit_hash) == HEX_HASH_LENGTH:
            return oid

        # Abbreviated: expand to the unique object with this prefix, never a ref name
        try:
            found = self._repo.get(commit_hash)
            if found is not None:
                return found.peel(pygit2.Commit).id
        except (KeyError, ValueError, pygit2.GitError) as e:
            logger.debug("Could not expand abbreviated hash %s: %s", commit_hash, e)

        return oid


def _to_record(commit: pygit2.Commit) -> CommitRecord:
    commit_hash = str(commit.id)
    return CommitRecord(
        hash=commit_hash,
        author=_identity(commit_hash, commit.author, "author"),
        committer=_identity(commit_hash, commit.committer, "committer"),
        message=commit_summary(commit.message),
    )


def _identity(commit_hash: str, signature: pygit2.Signature, role: str) -> Author:
    try:
        name = signature.name
        email = signature.email
    except UnicodeDecodeError as e:
        raise CommitFieldMissingError(commit_hash, f"decodable {role} signature") from e

    if not name:
        raise CommitFieldMissingError(commit_hash, f"{role} name")
    if not email:
        raise CommitFieldMissingError(commit_hash, f"{role} email")

    return Author(name=name, email=email)


class Repository:
    """A local Git repository opened for reading."""

    def __init__(self, inner: pygit2.Repository) -> None:
        self._inner = inner

    @classmethod
    def open(cls, path: str | Path) -> Repository:
        """Open the repository at ``path``.

        Raises:
            RepositoryOpenError: If ``path`` holds no valid repository
        """
        try:
            inner = pygit2.Repository(str(path))
        except (KeyError, pygit2.GitError) as e:
            raise RepositoryOpenError(f"No Git repository found at {path}") from e

        logger.debug("Opened repository at %s", inner.path)
        return cls(inner)

    def url(self, remote: str = "origin") -> str:
        """Return the fetch URL of ``remote``.

        Raises:
            RemoteNotFoundError: If the remote does not exist or has no URL
        """
        try:
            found = self._inner.remotes[remote]
        except (KeyError, ValueError) as e:
            raise RemoteNotFoundError(f"Remote '{remote}' not found") from e

        if not found.url:
            raise RemoteNotFoundError(f"Remote '{remote}' has no URL")

        return found.url

    def commits(self, branch: str, remote: str = "origin") -> CommitRangeWalker:
        """Walk the commits of ``branch`` as known by ``remote``.

        Raises:
            RefNotFoundError: If refs/remotes/<remote>/<branch> does not exist
        """
        ref_name = f"refs/remotes/{remote}/{branch}"
        try:
            reference = self._inner.references[ref_name]
        except (KeyError, ValueError) as e:
            raise RefNotFoundError(f"Branch '{branch}' not found: no reference {ref_name}") from e

        tip = reference.resolve().target
        return CommitRangeWalker(self._inner, tip)
