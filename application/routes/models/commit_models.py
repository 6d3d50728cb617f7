"""
Request models for staging and commit routes.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from common.constants import COMMIT_LOG_DEFAULT_LINES


class WriteFileRequest(BaseModel):
    """Stage a file. ``content`` is text unless ``base64`` is true."""

    filename: str = Field(..., min_length=1, description="Path relative to the staging root")
    content: str = Field(default="", description="File content")
    base64: bool = Field(default=False, description="Whether content is base64-encoded")


class FilePathParams(BaseModel):
    filename: str = Field(..., min_length=1, description="Path relative to the staging root")


class ListFilesParams(BaseModel):
    dir: Optional[str] = Field(default=None, description="Sub-directory to list")
    filter: Optional[str] = Field(default=None, description="Only paths ending with this suffix")


class CommitRequest(BaseModel):
    """Publish every pending change as one commit."""

    commit_message: str = Field(..., description="Commit message")
    dry_run: bool = Field(default=False, description="Only list pending changes")

    @field_validator("commit_message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("commit_message must not be blank")
        return v


class CommitLogParams(BaseModel):
    lines: int = Field(default=COMMIT_LOG_DEFAULT_LINES, ge=1, le=10000)
    search: Optional[str] = Field(default=None, description="Substring filter")


class DiffParams(BaseModel):
    prefix: str = Field(default="", description="Remote path prefix mapped onto the staging root")


class SyncParams(DiffParams):
    """Only remote paths under ``prefix`` are synced."""
