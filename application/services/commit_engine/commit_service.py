"""
Commit Service - facade wiring the staging area to the publish cycle.

This service provides a single entry point for:
- Staging file writes and deletes (which mark paths dirty)
- Publishing the dirty set as one commit on the integration branch
- Reading the commit audit log
- Comparing the staging area with the published branch
- Syncing the published branch back into the staging area

Publish cycles are serialized with an asyncio.Lock so at most one cycle per
branch is in flight inside this process.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from application.services.commit_engine.change_set import ChangeSetTracker
from application.services.commit_engine.commit_log import CommitLogRecorder
from application.services.commit_engine.commit_publisher import CommitPublisher
from application.services.commit_engine.models import (
    ExistingHead,
    MissingFilePolicy,
    PublishResult,
    PublishStatus,
)
from application.services.commit_engine.publish_cycle import PublishCycle
from application.services.commit_engine.remote_diff import RemoteDiff, RemoteDiffResult
from application.services.commit_engine.remote_sync import RemoteSync, RemoteSyncResult
from application.services.commit_engine.snapshot_resolver import SnapshotResolver
from application.services.commit_engine.staging_area import LocalStagingArea
from application.services.commit_engine.tree_builder import TreeBuilder
from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.git_data import GitDataOperations
from application.services.github.models.types import CommitIdentity, CommitInfo
from common.config.config import (
    CLIENT_GIT_BRANCH,
    COMMIT_AUTHOR_EMAIL,
    COMMIT_AUTHOR_NAME,
    COMMIT_CYCLE_TIMEOUT,
    COMMIT_MISSING_FILE_POLICY,
    LOGS_DIR,
    STAGING_DIR,
)
from common.constants import COMMIT_LOG_DEFAULT_LINES

logger = logging.getLogger(__name__)


class CommitService:
    """Unified service for staging files and publishing them to one branch."""

    def __init__(
        self,
        git_data: Optional[GitDataOperations] = None,
        tracker: Optional[ChangeSetTracker] = None,
        staging_dir: Optional[str] = None,
        logs_dir: Optional[str] = None,
        branch: Optional[str] = None,
        missing_file_policy: Optional[str] = None,
        cycle_timeout: Optional[float] = None,
        author: Optional[CommitIdentity] = None,
    ):
        """Initialize commit service.

        Args:
            git_data: Git data operations (defaults to a configured GitHub client)
            tracker: Change set tracker owned by this service
            staging_dir: Local staging directory (defaults to config)
            logs_dir: Directory for commits.log (defaults to config)
            branch: Integration branch (defaults to config)
            missing_file_policy: "skip" or "fail" (defaults to config)
            cycle_timeout: Deadline for one publish cycle in seconds
            author: Commit author/committer identity
        """
        self.branch = branch or CLIENT_GIT_BRANCH
        self.git_data = git_data or GitDataOperations(GitHubAPIClient())
        self.tracker = tracker if tracker is not None else ChangeSetTracker()
        self.staging = LocalStagingArea(staging_dir or STAGING_DIR, self.tracker)
        self.log_recorder = CommitLogRecorder(logs_dir or LOGS_DIR)

        if author is None and COMMIT_AUTHOR_NAME and COMMIT_AUTHOR_EMAIL:
            author = CommitIdentity(COMMIT_AUTHOR_NAME, COMMIT_AUTHOR_EMAIL)

        self.resolver = SnapshotResolver(self.git_data, self.branch)
        self.cycle = PublishCycle(
            tracker=self.tracker,
            file_reader=self.staging,
            resolver=self.resolver,
            tree_builder=TreeBuilder(
                self.git_data,
                MissingFilePolicy(missing_file_policy or COMMIT_MISSING_FILE_POLICY),
            ),
            publisher=CommitPublisher(self.git_data, self.branch, author=author),
            log_recorder=self.log_recorder,
            cycle_timeout=cycle_timeout or COMMIT_CYCLE_TIMEOUT,
        )
        self.remote_diff = RemoteDiff(self.git_data, self.resolver, self.staging, self.tracker)
        self.remote_sync = RemoteSync(self.git_data, self.resolver, self.staging, self.tracker)

        self._publish_lock = asyncio.Lock()
        self.commits_made = 0
        self.requests_served = 0
        self.started_at = time.monotonic()

    def write_file(self, path: str, content: bytes) -> str:
        return self.staging.write_file(path, content)

    def read_file(self, path: str) -> Optional[bytes]:
        return self.staging.read(path)

    def delete_file(self, path: str) -> bool:
        return self.staging.delete_file(path)

    def list_files(self, directory: Optional[str] = None, suffix: Optional[str] = None) -> List[str]:
        return self.staging.list_files(directory, suffix)

    def pending_changes(self) -> List[str]:
        return self.cycle.preview()

    async def publish(self, message: str) -> PublishResult:
        """Run one publish cycle, waiting for any cycle already in flight."""
        async with self._publish_lock:
            logger.info(f"Publishing {len(self.tracker)} pending path(s) to '{self.branch}'")
            result = await self.cycle.run(message)
        if result.status == PublishStatus.COMMITTED:
            self.commits_made += 1
        return result

    async def diff(self, remote_prefix: str = "") -> RemoteDiffResult:
        return await self.remote_diff.compare(remote_prefix)

    async def sync_from_remote(self, remote_prefix: str = "") -> RemoteSyncResult:
        """Pull the branch head into the staging area.

        Runs under the publish lock so a cycle never reads a half-synced file.
        """
        async with self._publish_lock:
            return await self.remote_sync.pull(remote_prefix)

    async def latest_commit(self) -> Optional[CommitInfo]:
        """Head commit of the branch, or None if it has no commits yet."""
        base = await self.resolver.resolve_base()
        if not isinstance(base, ExistingHead):
            return None
        return await self.git_data.get_commit(base.commit_sha)

    def record_request(self) -> None:
        self.requests_served += 1

    def read_commit_log(
        self, lines: int = COMMIT_LOG_DEFAULT_LINES, search: Optional[str] = None
    ) -> List[str]:
        return self.log_recorder.read_entries(lines=lines, search=search)

    def status(self) -> Dict[str, Any]:
        client = self.git_data.client
        uptime = int(time.monotonic() - self.started_at)
        return {
            "repo": f"{client.owner}/{client.repository_name}",
            "branch": self.branch,
            "git_connected": bool(client.token),
            "uptime": f"{uptime // 3600}h {uptime % 3600 // 60}m",
            "uptime_seconds": uptime,
            "pending_changes": len(self.tracker),
            "commits_made": self.commits_made,
            "requests_served": self.requests_served,
            "publish_in_progress": self._publish_lock.locked(),
        }


_commit_service: Optional[CommitService] = None


def get_commit_service() -> CommitService:
    """Get the process-wide CommitService used by the HTTP routes."""
    global _commit_service
    if _commit_service is None:
        _commit_service = CommitService()
    return _commit_service
