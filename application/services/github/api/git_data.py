"""
GitHub git data (object store) operations.

Wraps the low-level ``/repos/{owner}/{repo}/git/*`` endpoints: refs, commits,
trees and blobs. Expected failures are translated into typed exceptions so
callers can tell "no history yet" or "lost a race" apart from real errors.
"""

import base64
import logging
from typing import Iterable, List, Optional, Sequence

from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.errors import (
    GitHubAPIError,
    ObjectNotFoundError,
    RefAlreadyExistsError,
    RefConflictError,
    RefNotFoundError,
)
from application.services.github.models.types import (
    CommitIdentity,
    CommitInfo,
    RemoteTreeEntry,
    TreeEntry,
)
from common.constants import GIT_BLOB_ENCODING

logger = logging.getLogger(__name__)

EMPTY_REPOSITORY_MESSAGE = "git repository is empty"


def _is_empty_repository(error: GitHubAPIError) -> bool:
    return error.status_code == 409 and EMPTY_REPOSITORY_MESSAGE in error.message.lower()


class GitDataOperations:
    """Handles GitHub git database operations for a single repository."""

    def __init__(self, client: Optional[GitHubAPIClient] = None):
        """Initialize git data operations.

        Args:
            client: GitHub API client (creates new if not provided)
        """
        self.client = client or GitHubAPIClient()

    @property
    def _git_path(self) -> str:
        return f"{self.client.repo_path}/git"

    async def get_ref(self, branch: str) -> str:
        """Resolve a branch to the commit sha it points at.

        Args:
            branch: Branch name (without ``refs/heads/``)

        Returns:
            Commit sha of the branch head

        Raises:
            RefNotFoundError: If the branch does not exist or the repository is empty
            GitHubAPIError: For any other failure
        """
        try:
            data = await self.client.get(f"{self._git_path}/ref/heads/{branch}")
        except GitHubAPIError as e:
            if e.status_code == 404 or _is_empty_repository(e):
                raise RefNotFoundError(e.status_code, e.message, url=e.url) from e
            raise
        return data["object"]["sha"]

    async def get_commit(self, sha: str) -> CommitInfo:
        """Read a commit object.

        Raises:
            ObjectNotFoundError: If the commit does not exist
        """
        try:
            data = await self.client.get(f"{self._git_path}/commits/{sha}")
        except GitHubAPIError as e:
            if e.status_code == 404:
                raise ObjectNotFoundError(e.status_code, e.message, url=e.url) from e
            raise
        return CommitInfo.from_api(data)

    async def get_tree(self, sha: str, recursive: bool = True) -> List[RemoteTreeEntry]:
        """Read a tree as a flat list of entries.

        Args:
            sha: Tree sha
            recursive: Expand nested subtrees into full paths

        Returns:
            List of RemoteTreeEntry
        """
        params = {"recursive": "1"} if recursive else None
        data = await self.client.get(f"{self._git_path}/trees/{sha}", params=params)
        if data.get("truncated"):
            logger.warning(f"Tree {sha} listing was truncated by GitHub")
        return [RemoteTreeEntry.from_api(item) for item in data.get("tree", [])]

    async def get_blob(self, sha: str) -> bytes:
        """Download blob content.

        Raises:
            ObjectNotFoundError: If the blob does not exist
        """
        try:
            data = await self.client.get(f"{self._git_path}/blobs/{sha}")
        except GitHubAPIError as e:
            if e.status_code == 404:
                raise ObjectNotFoundError(e.status_code, e.message, url=e.url) from e
            raise
        if data.get("encoding") == GIT_BLOB_ENCODING:
            return base64.b64decode(data.get("content", ""))
        return data.get("content", "").encode("utf-8")

    async def create_blob(self, content: bytes) -> str:
        """Upload file content as a blob.

        Args:
            content: Raw file bytes

        Returns:
            Blob sha
        """
        payload = {
            "content": base64.b64encode(content).decode("ascii"),
            "encoding": GIT_BLOB_ENCODING,
        }
        data = await self.client.post(f"{self._git_path}/blobs", data=payload)
        return data["sha"]

    async def create_tree(
        self, entries: Iterable[TreeEntry], base_tree: Optional[str] = None
    ) -> str:
        """Create a tree from entries, layered on ``base_tree`` when given.

        Args:
            entries: Tree entries to write
            base_tree: Sha of the tree the entries are applied on top of

        Returns:
            New tree sha
        """
        payload = {"tree": [entry.to_payload() for entry in entries]}
        if base_tree:
            payload["base_tree"] = base_tree
        data = await self.client.post(f"{self._git_path}/trees", data=payload)
        return data["sha"]

    async def create_commit(
        self,
        message: str,
        tree_sha: str,
        parent_shas: Sequence[str],
        author: Optional[CommitIdentity] = None,
    ) -> str:
        """Create a commit object.

        Args:
            message: Commit message
            tree_sha: Sha of the commit's tree
            parent_shas: Parent commit shas (empty for the first commit)
            author: Optional author/committer identity

        Returns:
            New commit sha
        """
        payload = {"message": message, "tree": tree_sha, "parents": list(parent_shas)}
        if author is not None:
            payload["author"] = author.to_payload()
            payload["committer"] = author.to_payload()
        data = await self.client.post(f"{self._git_path}/commits", data=payload)
        return data["sha"]

    async def update_ref(self, branch: str, sha: str, force: bool = False) -> None:
        """Move an existing branch to a new commit.

        Raises:
            RefConflictError: If the update was rejected (not a fast forward,
                or the ref changed underneath us)
        """
        payload = {"sha": sha, "force": force}
        try:
            await self.client.patch(f"{self._git_path}/refs/heads/{branch}", data=payload)
        except GitHubAPIError as e:
            if e.status_code in (409, 422):
                raise RefConflictError(e.status_code, e.message, url=e.url) from e
            raise

    async def create_ref(self, branch: str, sha: str) -> None:
        """Create a new branch pointing at ``sha``.

        Raises:
            RefAlreadyExistsError: If the branch already exists
        """
        payload = {"ref": f"refs/heads/{branch}", "sha": sha}
        try:
            await self.client.post(f"{self._git_path}/refs", data=payload)
        except GitHubAPIError as e:
            if e.status_code == 422 and "already exists" in e.message.lower():
                raise RefAlreadyExistsError(e.status_code, e.message, url=e.url) from e
            raise
