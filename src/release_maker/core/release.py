"""Release data model and its JSON encoding.

A release groups changes into four sections (added, changed, fixed,
removed). Each change names its authors and commits as a "flexible
list": one item is written as a bare string, several items as an
array of strings.

Wire form of a change is a positional array::

    ["feature", "Fast parser", "alice", ["1234567abc", "89abcdef012"]]
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import IO, Any, Generic, Protocol, TypeVar

from release_maker.exceptions import (
    CommitRefConversionError,
    EmptyCategoryError,
    FlexibleListDecodeError,
    ReleaseDecodeError,
    ReleaseMakerError,
)

logger = logging.getLogger(__name__)

SHORT_HASH_LENGTH = 7

SECTIONS = ("added", "changed", "fixed", "removed")


class StringConstructible(Protocol):
    """An item that round-trips through its plain string form."""

    def to_str(self) -> str: ...


T = TypeVar("T", bound=StringConstructible)


@dataclass(frozen=True, slots=True)
class Author:
    """A GitHub user, identified by login name."""

    name: str

    @classmethod
    def from_str(cls, value: str) -> Author:
        return cls(value)

    def to_str(self) -> str:
        return self.name

    def __str__(self) -> str:
        """Mention link, e.g. ``[@alice]``."""
        return f"[@{self.name}]"


@dataclass(frozen=True, slots=True)
class CommitRef:
    """A commit identified by its hash (at least 7 characters)."""

    hash: str

    def __post_init__(self) -> None:
        if len(self.hash) < SHORT_HASH_LENGTH:
            raise CommitRefConversionError(self.hash)

    @classmethod
    def from_str(cls, value: str) -> CommitRef:
        return cls(value)

    def to_str(self) -> str:
        return self.hash

    @property
    def short(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]

    def __str__(self) -> str:
        """Short commit reference, e.g. ``[c:1234567]``."""
        return f"[c:{self.short}]"


class FlexibleList(Sequence[T], Generic[T]):
    """An ordered, non-empty sequence encoded as a scalar when it holds one item."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T]) -> None:
        self._items: tuple[T, ...] = tuple(items)
        if not self._items:
            raise FlexibleListDecodeError("expected at least one item")

    @classmethod
    def of(cls, *items: T) -> FlexibleList[T]:
        return cls(items)

    def __getitem__(self, index):  # type: ignore[override]
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FlexibleList):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"FlexibleList({list(self._items)!r})"

    def encode(self) -> str | list[str]:
        """Encode as a bare string for one item, otherwise as a list of strings."""
        if len(self._items) == 1:
            return self._items[0].to_str()
        return [item.to_str() for item in self._items]

    @classmethod
    def decode(cls, value: Any, factory: Callable[[str], T]) -> FlexibleList[T]:
        """Decode a bare string or an array of strings through ``factory``.

        Raises:
            FlexibleListDecodeError: If ``value`` is neither a string nor an
                array, the array is empty, or an element cannot be parsed
        """
        if isinstance(value, str):
            raw = [value]
        elif isinstance(value, list):
            raw = value
        else:
            raise FlexibleListDecodeError(
                f"expected one string or more, got {type(value).__name__}"
            )

        if not raw:
            raise FlexibleListDecodeError("expected at least one item")

        items = []
        for element in raw:
            if not isinstance(element, str):
                raise FlexibleListDecodeError(
                    f"expected a string item, got {type(element).__name__}"
                )
            try:
                items.append(factory(element))
            except ReleaseMakerError as e:
                raise FlexibleListDecodeError(
                    f"failed to parse from string {element!r}: {e.message}", details=e
                ) from e

        return cls(items)


@dataclass(frozen=True, slots=True)
class Change:
    """One release-facing change description."""

    category: str
    name: str
    authors: FlexibleList[Author]
    commits: FlexibleList[CommitRef]

    def __post_init__(self) -> None:
        if not self.category:
            raise EmptyCategoryError(f"Change {self.name!r} has an empty category")

    @classmethod
    def single(cls, category: str, name: str, author: str, commit: str) -> Change:
        """Create a change with one author and one commit."""
        return cls(
            category,
            name,
            FlexibleList.of(Author(author)),
            FlexibleList.of(CommitRef(commit)),
        )

    def to_json(self) -> list[Any]:
        return [self.category, self.name, self.authors.encode(), self.commits.encode()]

    @classmethod
    def from_json(cls, value: Any) -> Change:
        if not isinstance(value, list) or len(value) != 4:
            raise ReleaseDecodeError(
                "a change must be an array of [category, name, authors, commits]",
                details=value,
            )

        category, name, authors, commits = value
        if not isinstance(category, str) or not isinstance(name, str):
            raise ReleaseDecodeError("change category and name must be strings", details=value)

        return cls(
            category,
            name,
            FlexibleList.decode(authors, Author.from_str),
            FlexibleList.decode(commits, CommitRef.from_str),
        )


@dataclass(slots=True)
class Release:
    """A release of a repository, with its changes grouped by section."""

    repo_url: str
    added: list[Change] = field(default_factory=list)
    changed: list[Change] = field(default_factory=list)
    fixed: list[Change] = field(default_factory=list)
    removed: list[Change] = field(default_factory=list)

    def sections(self) -> Iterator[tuple[str, list[Change]]]:
        for section in SECTIONS:
            yield section, getattr(self, section)

    def changes(self) -> Iterator[Change]:
        """Iterate all changes in section order."""
        for _, changes in self.sections():
            yield from changes

    def unique_authors(self) -> list[Author]:
        """Return every author once, in order of first appearance."""
        return list(dict.fromkeys(a for change in self.changes() for a in change.authors))

    def all_commits(self) -> list[CommitRef]:
        """Return every commit reference, duplicates included."""
        return [c for change in self.changes() for c in change.commits]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"repo_url": self.repo_url}
        for section, changes in self.sections():
            data[section] = [change.to_json() for change in changes]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Release:
        """Build a release from decoded JSON.

        Raises:
            ReleaseDecodeError: If the document has the wrong shape
            FlexibleListDecodeError: If an authors or commits field is invalid
        """
        if not isinstance(data, dict):
            raise ReleaseDecodeError("a release must be a JSON object")

        repo_url = data.get("repo_url")
        if not isinstance(repo_url, str):
            raise ReleaseDecodeError("missing or invalid field 'repo_url'")

        sections: dict[str, list[Change]] = {}
        for section in SECTIONS:
            raw = data.get(section, [])
            if not isinstance(raw, list):
                raise ReleaseDecodeError(f"field '{section}' must be an array")
            sections[section] = [Change.from_json(item) for item in raw]

        return cls(repo_url=repo_url, **sections)


def load_release(text: str) -> Release:
    """Parse a release from JSON text.

    Raises:
        ReleaseDecodeError: If the text is not valid JSON or has the wrong shape
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ReleaseDecodeError(f"Invalid JSON: {e}") from e

    release = Release.from_dict(data)
    logger.debug("Loaded release with %d changes", sum(1 for _ in release.changes()))
    return release


def read_release(stream: IO[str]) -> Release:
    """Parse a release from a text stream.

    Raises:
        ReleaseDecodeError: If the stream is not valid UTF-8 or not a valid release
    """
    try:
        text = stream.read()
    except UnicodeDecodeError as e:
        raise ReleaseDecodeError(f"Input is not valid UTF-8: {e}") from e

    return load_release(text)


def dumps_release(release: Release) -> str:
    """Serialize a release as indented JSON."""
    return json.dumps(release.to_dict(), indent=2, ensure_ascii=False)
