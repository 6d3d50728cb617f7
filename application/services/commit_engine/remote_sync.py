"""Pulls the files on the published branch head into the staging area."""

import logging
from dataclasses import dataclass, field
from typing import List

from application.services.commit_engine.change_set import ChangeSetTracker
from application.services.commit_engine.errors import InvalidStagingPathError
from application.services.commit_engine.models import ExistingHead
from application.services.commit_engine.snapshot_resolver import SnapshotResolver
from application.services.commit_engine.staging_area import LocalStagingArea
from application.services.github.api.git_data import GitDataOperations

logger = logging.getLogger(__name__)


@dataclass
class RemoteSyncResult:
    synced: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)
    head_sha: str = ""

    def to_dict(self) -> dict:
        return {
            "success": True,
            "synced": self.synced,
            "kept": self.kept,
            "head_sha": self.head_sha or None,
        }


class RemoteSync:
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

    async def pull(self, remote_prefix: str = "") -> RemoteSyncResult:
        """Download every blob under ``remote_prefix`` into the staging area.

        Synced files already match the branch, so they are not marked dirty.
        Paths with pending local changes are left untouched and reported in
        ``kept``. An empty repository syncs nothing.
        """
        base = await self.resolver.resolve_base()
        if not isinstance(base, ExistingHead):
            logger.info("Branch has no commits yet, nothing to sync")
            return RemoteSyncResult()

        result = RemoteSyncResult(head_sha=base.commit_sha)
        for entry in await self.git_data.get_tree(base.tree_sha, recursive=True):
            if not entry.is_blob or not entry.path.startswith(remote_prefix):
                continue
            path = entry.path[len(remote_prefix):]
            if path in self.tracker:
                result.kept.append(path)
                continue
            content = await self.git_data.get_blob(entry.sha)
            try:
                result.synced.append(self.staging.write_file(path, content, mark_dirty=False))
            except InvalidStagingPathError:
                logger.warning(f"⚠️ Skipping remote path outside the staging area: {entry.path}")

        logger.info(
            f"✅ Synced {len(result.synced)} file(s) from {base.commit_sha}, "
            f"kept {len(result.kept)} locally modified"
        )
        return result
