"""Creates the commit object and advances (or creates) the branch ref."""

import logging
from typing import Callable, Optional

from application.services.commit_engine.errors import GenesisRaceError
from application.services.commit_engine.models import PublishPhase
from application.services.github.api.errors import RefAlreadyExistsError
from application.services.github.api.git_data import GitDataOperations
from application.services.github.models.types import CommitIdentity

logger = logging.getLogger(__name__)


class CommitPublisher:
    """Writes linear, single-parent history onto one branch.

    Ref transitions:
        no ref  --create ok-------> ref@new
        no ref  --create exists---> GenesisRaceError (caller restarts once)
        ref@old --update ok-------> ref@new
        ref@old --update rejected-> RefConflictError (caller must restart)
    """

    def __init__(
        self,
        git_data: GitDataOperations,
        branch: str,
        author: Optional[CommitIdentity] = None,
    ) -> None:
        self.git_data = git_data
        self.branch = branch
        self.author = author

    async def publish(
        self,
        message: str,
        tree_sha: str,
        parent_sha: Optional[str],
        on_phase: Optional[Callable[[PublishPhase], None]] = None,
    ) -> str:
        """Create the commit and point the branch at it.

        Args:
            message: Commit message
            tree_sha: Tree the commit snapshots (must already exist)
            parent_sha: Current head, or None for the first commit on the branch
            on_phase: Notified when the ref step starts

        Returns:
            New commit sha

        Raises:
            GenesisRaceError: The branch was created by someone else meanwhile
            RefConflictError: The branch moved since ``parent_sha`` was read
        """
        parents = [parent_sha] if parent_sha else []
        commit_sha = await self.git_data.create_commit(
            message, tree_sha, parents, author=self.author
        )

        if on_phase:
            on_phase(PublishPhase.REF)

        if parent_sha:
            await self.git_data.update_ref(self.branch, commit_sha)
            logger.info(f"✅ Advanced '{self.branch}' from {parent_sha} to {commit_sha}")
            return commit_sha

        try:
            await self.git_data.create_ref(self.branch, commit_sha)
        except RefAlreadyExistsError as e:
            logger.warning(
                f"⚠️ Branch '{self.branch}' was created concurrently; "
                f"commit {commit_sha} left unreferenced"
            )
            raise GenesisRaceError(
                f"Branch '{self.branch}' already exists: {e.message}"
            ) from e

        logger.info(f"✅ Created '{self.branch}' at initial commit {commit_sha}")
        return commit_sha
