"""
Publish cycle: one end-to-end pass from dirty paths to an advanced branch.

    tracker.snapshot -> read staged files -> resolve_base -> blobs -> tree
        -> commit -> ref -> commit log -> tracker.clear(snapshot)

The cycle is the only place where component exceptions are turned into a
PublishResult value. It holds no lock; callers serialize cycles per branch
(see CommitService).
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from application.services.commit_engine.change_set import ChangeSetTracker
from application.services.commit_engine.commit_log import CommitLogRecorder
from application.services.commit_engine.commit_publisher import CommitPublisher
from application.services.commit_engine.errors import (
    CommitEngineError,
    GenesisRaceError,
    MissingStagedFileError,
    NothingToPublish,
    StagedFileReadError,
)
from application.services.commit_engine.models import (
    ErrorKind,
    ExistingHead,
    FileReader,
    PublishError,
    PublishPhase,
    PublishResult,
    PublishStatus,
    StagedFiles,
    TreeBuildResult,
)
from application.services.commit_engine.snapshot_resolver import SnapshotResolver
from application.services.commit_engine.tree_builder import TreeBuilder
from application.services.github.api.errors import (
    GitHubAPIError,
    GitHubTransportError,
    RefConflictError,
)
from common.config.config import COMMIT_CYCLE_TIMEOUT
from common.constants import GENESIS_RACE_MAX_RETRIES

logger = logging.getLogger(__name__)


class _CycleState:
    """Mutable progress marker so failures can name the phase they hit."""

    def __init__(self) -> None:
        self.phase = PublishPhase.RESOLVE
        self.attempts = 0

    def enter(self, phase: PublishPhase) -> None:
        self.phase = phase


def classify_error(error: Exception) -> Tuple[ErrorKind, Optional[int]]:
    """Map an exception raised inside a cycle onto the error taxonomy."""
    if isinstance(error, (RefConflictError, GenesisRaceError)):
        return ErrorKind.CONFLICT, getattr(error, "status_code", None)
    if isinstance(error, GitHubAPIError):
        if error.is_server_error or error.status_code == 429:
            return ErrorKind.TRANSIENT, error.status_code
        return ErrorKind.FATAL, error.status_code
    if isinstance(error, (GitHubTransportError, asyncio.TimeoutError)):
        return ErrorKind.TRANSIENT, None
    if isinstance(error, (MissingStagedFileError, StagedFileReadError)):
        return ErrorKind.INPUT, None
    return ErrorKind.FATAL, None


class PublishCycle:
    def __init__(
        self,
        tracker: ChangeSetTracker,
        file_reader: FileReader,
        resolver: SnapshotResolver,
        tree_builder: TreeBuilder,
        publisher: CommitPublisher,
        log_recorder: CommitLogRecorder,
        cycle_timeout: Optional[float] = None,
        max_genesis_retries: int = GENESIS_RACE_MAX_RETRIES,
    ) -> None:
        self.tracker = tracker
        self.file_reader = file_reader
        self.resolver = resolver
        self.tree_builder = tree_builder
        self.publisher = publisher
        self.log_recorder = log_recorder
        self.cycle_timeout = cycle_timeout or COMMIT_CYCLE_TIMEOUT
        self.max_genesis_retries = max_genesis_retries

    def preview(self) -> List[str]:
        """Paths the next cycle would consider, without touching the remote."""
        return sorted(self.tracker.snapshot())

    async def run(self, message: str) -> PublishResult:
        """Publish every dirty path as one commit.

        Returns:
            PublishResult. On failure the tracker is left untouched so the
            same cycle can be retried without re-staging.
        """
        change_set = self.tracker.snapshot()
        if not change_set:
            logger.info("Nothing to publish: change set is empty")
            return PublishResult(status=PublishStatus.NOTHING_TO_PUBLISH, attempts=0)

        state = _CycleState()
        try:
            state.enter(PublishPhase.BLOBS)
            staged = self.tree_builder.collect(change_set, self.file_reader)
            commit_sha, parent_sha, build = await asyncio.wait_for(
                self._run_with_genesis_retry(message, staged, state),
                timeout=self.cycle_timeout,
            )
        except NothingToPublish as e:
            # Only paths verified absent leave the tracker
            self.tracker.clear(change_set.restrict(e.skipped))
            logger.info(f"Nothing to publish: {len(e.skipped)} staged path(s) no longer exist")
            return PublishResult(
                status=PublishStatus.NOTHING_TO_PUBLISH,
                skipped=sorted(e.skipped),
                attempts=state.attempts,
            )
        except (
            CommitEngineError,
            GitHubAPIError,
            GitHubTransportError,
            asyncio.TimeoutError,
        ) as e:
            return self._failure(e, state)

        self.log_recorder.record(message, build.committed)
        self.tracker.clear(change_set)

        return PublishResult(
            status=PublishStatus.COMMITTED,
            commit_sha=commit_sha,
            parent_sha=parent_sha,
            files=build.committed,
            skipped=sorted(build.skipped),
            attempts=state.attempts,
        )

    async def _run_with_genesis_retry(
        self, message: str, staged: StagedFiles, state: _CycleState
    ) -> Tuple[str, Optional[str], TreeBuildResult]:
        while True:
            state.attempts += 1
            try:
                return await self._attempt(message, staged, state)
            except GenesisRaceError:
                if state.attempts > self.max_genesis_retries:
                    raise
                logger.warning(
                    "⚠️ Lost the race to create the branch; "
                    "restarting the cycle against the new head"
                )

    async def _attempt(
        self, message: str, staged: StagedFiles, state: _CycleState
    ) -> Tuple[str, Optional[str], TreeBuildResult]:
        state.enter(PublishPhase.RESOLVE)
        base = await self.resolver.resolve_base()
        if isinstance(base, ExistingHead):
            parent_sha, base_tree_sha = base.commit_sha, base.tree_sha
        else:
            parent_sha, base_tree_sha = None, None

        state.enter(PublishPhase.BLOBS)
        build = await self.tree_builder.write(base_tree_sha, staged, on_phase=state.enter)

        state.enter(PublishPhase.COMMIT)
        commit_sha = await self.publisher.publish(
            message, build.tree_sha, parent_sha, on_phase=state.enter
        )
        return commit_sha, parent_sha, build

    def _failure(self, error: Exception, state: _CycleState) -> PublishResult:
        kind, status_code = classify_error(error)
        message = str(error) or error.__class__.__name__
        if isinstance(error, asyncio.TimeoutError):
            message = f"Publish cycle exceeded {self.cycle_timeout}s deadline"
        if kind == ErrorKind.CONFLICT:
            message = f"{message} (retry later)"
        logger.error(f"❌ Publish failed during {state.phase.value} ({kind.value}): {message}")
        return PublishResult(
            status=PublishStatus.FAILED,
            attempts=state.attempts,
            error=PublishError(
                phase=state.phase, kind=kind, message=message, status_code=status_code
            ),
        )
