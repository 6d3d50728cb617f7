"""Commit engine error types."""

from typing import Iterable, Optional


class CommitEngineError(Exception):
    """Base class for errors raised inside a publish cycle."""


class NothingToPublish(CommitEngineError):
    """Raised when a cycle has no tree entries to write.

    Attributes:
        skipped: Staged paths that were checked and found missing.
    """

    def __init__(self, skipped: Optional[Iterable[str]] = None) -> None:
        self.skipped = frozenset(skipped or ())
        super().__init__("No changes to commit")


class MissingStagedFileError(CommitEngineError):
    """Raised under the strict policy when a dirty path has no staged file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Staged file not found: {path}")


class StagedFileReadError(CommitEngineError):
    """A staged file exists but could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not read staged file {path}: {reason}")


class InconsistentRemoteStateError(CommitEngineError):
    """The branch ref resolved but its commit could not be read."""


class GenesisRaceError(CommitEngineError):
    """Creating the branch ref failed because another writer created it first."""


class InvalidStagingPathError(CommitEngineError):
    """A staging path escapes the staging root."""
