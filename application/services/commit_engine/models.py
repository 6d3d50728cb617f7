"""
Types shared by the commit engine components.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Protocol, Tuple, Union

from application.services.github.models.types import TreeEntry


class MissingFilePolicy(str, Enum):
    SKIP = "skip"
    FAIL = "fail"


class PublishStatus(str, Enum):
    COMMITTED = "committed"
    NOTHING_TO_PUBLISH = "nothing_to_publish"
    FAILED = "failed"


class PublishPhase(str, Enum):
    RESOLVE = "resolve"
    BLOBS = "blobs"
    TREE = "tree"
    COMMIT = "commit"
    REF = "ref"


class ErrorKind(str, Enum):
    TRANSIENT = "transient"
    CONFLICT = "conflict"
    FATAL = "fatal"
    INPUT = "input"


class FileReader(Protocol):
    def read(self, path: str) -> Optional[bytes]:
        """Return the staged bytes for ``path`` or None if it does not exist."""


@dataclass(frozen=True)
class ExistingHead:
    """The branch exists and points at ``commit_sha`` whose tree is ``tree_sha``."""

    commit_sha: str
    tree_sha: str


@dataclass(frozen=True)
class EmptyRepository:
    """The branch has no ref yet; the next commit is the first one."""


BaseSnapshot = Union[ExistingHead, EmptyRepository]


@dataclass(frozen=True)
class StagedFiles:
    """Contents read from the staging area for one cycle, sorted by path."""

    files: Tuple[Tuple[str, bytes], ...]
    skipped: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class TreeBuildResult:
    tree_sha: str
    entries: Tuple[TreeEntry, ...]
    skipped: FrozenSet[str] = frozenset()

    @property
    def committed(self) -> List[str]:
        return [entry.path for entry in self.entries]


@dataclass(frozen=True)
class PublishError:
    phase: PublishPhase
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
        }


@dataclass
class PublishResult:
    """Single outcome of a publish cycle."""

    status: PublishStatus
    commit_sha: Optional[str] = None
    files: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    parent_sha: Optional[str] = None
    attempts: int = 1
    error: Optional[PublishError] = None

    @property
    def success(self) -> bool:
        return self.status != PublishStatus.FAILED

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "status": self.status.value,
            "commit_sha": self.commit_sha,
            "parent_sha": self.parent_sha,
            "files": self.files,
            "skipped": self.skipped,
            "attempts": self.attempts,
            "error": self.error.to_dict() if self.error else None,
        }
