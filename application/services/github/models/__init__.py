"""
GitHub Models Module

Shared dataclasses for GitHub git data operations.
"""

from application.services.github.models.types import (
    CommitIdentity,
    CommitInfo,
    RemoteTreeEntry,
    TreeEntry,
)

__all__ = [
    "CommitIdentity",
    "CommitInfo",
    "RemoteTreeEntry",
    "TreeEntry",
]
