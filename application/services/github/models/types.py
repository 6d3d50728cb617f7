"""
Shared types and models for GitHub git data operations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from common.constants import GIT_BLOB_TYPE, GIT_FILE_MODE


@dataclass(frozen=True)
class TreeEntry:
    """Entry submitted to the create-tree call."""

    path: str
    sha: str
    mode: str = GIT_FILE_MODE
    type: str = GIT_BLOB_TYPE

    def to_payload(self) -> Dict[str, str]:
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass(frozen=True)
class RemoteTreeEntry:
    """Entry returned by the get-tree call."""

    path: str
    mode: str
    type: str
    sha: str
    size: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RemoteTreeEntry":
        return cls(
            path=data.get("path", ""),
            mode=data.get("mode", ""),
            type=data.get("type", ""),
            sha=data.get("sha", ""),
            size=data.get("size"),
        )

    @property
    def is_blob(self) -> bool:
        return self.type == GIT_BLOB_TYPE


@dataclass(frozen=True)
class CommitInfo:
    sha: str
    tree_sha: str
    parent_shas: List[str] = field(default_factory=list)
    message: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CommitInfo":
        return cls(
            sha=data["sha"],
            tree_sha=data["tree"]["sha"],
            parent_shas=[parent["sha"] for parent in data.get("parents", [])],
            message=data.get("message", ""),
        )


@dataclass(frozen=True)
class CommitIdentity:
    """Author/committer metadata attached to new commits."""

    name: str
    email: str

    def to_payload(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email}
