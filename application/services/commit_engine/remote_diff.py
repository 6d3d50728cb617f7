"""Compares the staging area with the files on the published branch head."""

import logging
from dataclasses import dataclass, field
from typing import List

from application.services.commit_engine.change_set import ChangeSetTracker
from application.services.commit_engine.models import ExistingHead
from application.services.commit_engine.snapshot_resolver import SnapshotResolver
from application.services.commit_engine.staging_area import LocalStagingArea
from application.services.github.api.git_data import GitDataOperations

logger = logging.getLogger(__name__)


@dataclass
class RemoteDiffResult:
    added: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    head_sha: str = ""

    def to_dict(self) -> dict:
        return {
            "added": self.added,
            "deleted": self.deleted,
            "modified": self.modified,
            "head_sha": self.head_sha or None,
        }


class RemoteDiff:
    def __init__(
        self,
        git_data: GitDataOperations,
        resolver: SnapshotResolver,
        staging: LocalStagingArea,
        tracker: ChangeSetTracker,
    ) -> None:
        self.git_data = git_data
        self.resolver = resolver
        self.staging = staging
        self.tracker = tracker

    async def compare(self, remote_prefix: str = "") -> RemoteDiffResult:
        """Diff staged files against the branch head.

        ``added`` are local-only files, ``deleted`` are remote-only files and
        ``modified`` is the tracker's current dirty set. Remote paths outside
        ``remote_prefix`` are ignored and the prefix is stripped.
        """
        base = await self.resolver.resolve_base()
        remote_files = set()
        head_sha = ""
        if isinstance(base, ExistingHead):
            head_sha = base.commit_sha
            for entry in await self.git_data.get_tree(base.tree_sha, recursive=True):
                if entry.is_blob and entry.path.startswith(remote_prefix):
                    remote_files.add(entry.path[len(remote_prefix):])

        local_files = set(self.staging.list_files())
        result = RemoteDiffResult(
            added=sorted(local_files - remote_files),
            deleted=sorted(remote_files - local_files),
            modified=sorted(self.tracker.paths()),
            head_sha=head_sha,
        )
        logger.info(
            f"Remote diff: {len(result.added)} added, {len(result.deleted)} deleted, "
            f"{len(result.modified)} modified"
        )
        return result
