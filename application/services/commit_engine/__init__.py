"""
Commit Engine Package

Publishes a batch of locally staged files as one commit through the git
data API (blobs -> tree -> commit -> ref), without a local clone.
"""

from application.services.commit_engine.change_set import ChangeSet, ChangeSetTracker
from application.services.commit_engine.commit_log import CommitLogRecorder
from application.services.commit_engine.commit_publisher import CommitPublisher
from application.services.commit_engine.commit_service import CommitService, get_commit_service
from application.services.commit_engine.models import (
    EmptyRepository,
    ErrorKind,
    ExistingHead,
    MissingFilePolicy,
    PublishError,
    PublishPhase,
    PublishResult,
    PublishStatus,
)
from application.services.commit_engine.publish_cycle import PublishCycle
from application.services.commit_engine.snapshot_resolver import SnapshotResolver
from application.services.commit_engine.staging_area import LocalStagingArea
from application.services.commit_engine.tree_builder import TreeBuilder

__all__ = [
    "ChangeSet",
    "ChangeSetTracker",
    "CommitLogRecorder",
    "CommitPublisher",
    "CommitService",
    "EmptyRepository",
    "ErrorKind",
    "ExistingHead",
    "LocalStagingArea",
    "MissingFilePolicy",
    "PublishCycle",
    "PublishError",
    "PublishPhase",
    "PublishResult",
    "PublishStatus",
    "SnapshotResolver",
    "TreeBuilder",
    "get_commit_service",
]
