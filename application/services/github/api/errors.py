"""
GitHub API error types.

Every non-2xx response from the GitHub REST API surfaces as a
``GitHubAPIError`` carrying the status code; transport-level failures
(connection errors, timeouts) surface as ``GitHubTransportError``.
"""

from typing import Optional


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, message: str, url: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"GitHub API request failed (status {status_code}): {message}")

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


class GitHubTransportError(Exception):
    """Raised when a request never produced a response (network, timeout)."""


class RefNotFoundError(GitHubAPIError):
    """The requested branch ref does not exist (or the repository is empty)."""


class ObjectNotFoundError(GitHubAPIError):
    """The requested git object (commit, tree) does not exist."""


class RefConflictError(GitHubAPIError):
    """A ref update was rejected because the ref moved concurrently."""


class RefAlreadyExistsError(RefConflictError):
    """A ref create was rejected because the ref already exists."""
