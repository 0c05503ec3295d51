"""Exception hierarchy for release-maker.

Every error raised by the library derives from ReleaseMakerError, so
callers can catch a single type at the outer boundary while still
being able to distinguish repository, release-document and
configuration failures.
"""

from __future__ import annotations

from typing import Any


class ReleaseMakerError(Exception):
    """Base class for all release-maker errors."""

    def __init__(self, message: str, *, details: Any = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# Repository / commit extraction


class RepositoryError(ReleaseMakerError):
    """Base class for failures while reading a Git repository."""


class RepositoryOpenError(RepositoryError):
    """No valid repository was found at the given path."""


class RemoteNotFoundError(RepositoryError):
    """The requested remote does not exist or has no URL."""


class RefNotFoundError(RepositoryError):
    """The branch has no remote tracking reference."""


class CommitLookupError(RepositoryError):
    """A commit id could not be resolved to a commit object."""


class HashValidationError(RepositoryError):
    """A boundary hash is empty, too long or contains non-hex characters."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        super().__init__(f"Invalid commit hash {value!r}: {reason}", details=reason)


class CommitFieldMissingError(RepositoryError):
    """A commit lacks an author or committer name or email."""

    def __init__(self, commit_hash: str, field: str) -> None:
        self.commit_hash = commit_hash
        self.field = field
        super().__init__(f"Commit {commit_hash} has no {field}")


# Release document


class ReleaseError(ReleaseMakerError):
    """Base class for invalid release data."""


class CommitRefConversionError(ReleaseError):
    """A commit hash string is too short to be a commit reference."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"commit hashes must not be shorter than 7 characters: {value!r}",
            details=value,
        )


class FlexibleListDecodeError(ReleaseError):
    """A one-or-more field could not be decoded."""


class EmptyCategoryError(ReleaseError):
    """A change was given an empty category."""


class ReleaseDecodeError(ReleaseError):
    """The release document is malformed."""


# Configuration


class ConfigError(ReleaseMakerError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """pyproject.toml could not be found."""


class ConfigValidationError(ConfigError):
    """The [tool.release-maker] table is invalid."""
