"""Determines the current published state of the integration branch."""

import logging

from application.services.commit_engine.errors import InconsistentRemoteStateError
from application.services.commit_engine.models import BaseSnapshot, EmptyRepository, ExistingHead
from application.services.github.api.errors import GitHubAPIError, RefNotFoundError
from application.services.github.api.git_data import GitDataOperations

logger = logging.getLogger(__name__)


class SnapshotResolver:
    def __init__(self, git_data: GitDataOperations, branch: str) -> None:
        self.git_data = git_data
        self.branch = branch

    async def resolve_base(self) -> BaseSnapshot:
        """Return the branch head, or EmptyRepository if the branch has no ref.

        A missing ref is the normal state of a fresh repository. Any other
        get-ref failure propagates. Once the ref resolves, failing to read its
        commit is an inconsistency and raises InconsistentRemoteStateError,
        except for 5xx responses, which propagate as transient failures.
        """
        try:
            commit_sha = await self.git_data.get_ref(self.branch)
        except RefNotFoundError:
            logger.info(f"Branch '{self.branch}' has no ref yet, treating repository as empty")
            return EmptyRepository()

        try:
            commit = await self.git_data.get_commit(commit_sha)
        except GitHubAPIError as e:
            if e.is_server_error:
                raise
            raise InconsistentRemoteStateError(
                f"Branch '{self.branch}' points at {commit_sha} but the commit "
                f"could not be read: {e.message}"
            ) from e

        logger.debug(f"Resolved '{self.branch}' to commit {commit_sha} (tree {commit.tree_sha})")
        return ExistingHead(commit_sha=commit_sha, tree_sha=commit.tree_sha)
