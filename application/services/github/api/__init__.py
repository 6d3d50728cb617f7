"""
GitHub API Module

Handles the GitHub REST API interactions used by the commit engine:
- Authenticated HTTP client
- Git data operations (refs, commits, trees, blobs)
"""

from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.git_data import GitDataOperations

__all__ = [
    "GitHubAPIClient",
    "GitDataOperations",
]
