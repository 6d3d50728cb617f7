"""
Request/Response Models for API endpoints.

Provides Pydantic models for type-safe request validation.
"""

from .commit_models import (
    CommitLogParams,
    CommitRequest,
    DiffParams,
    FilePathParams,
    ListFilesParams,
    SyncParams,
    WriteFileRequest,
)

__all__ = [
    "CommitLogParams",
    "CommitRequest",
    "DiffParams",
    "FilePathParams",
    "ListFilesParams",
    "SyncParams",
    "WriteFileRequest",
]
