"""
GitHub Service Package

Client layer for the GitHub REST API used by the commit engine.

Main Components:
- GitHubAPIClient: Authenticated HTTP client
- GitDataOperations: Refs, commits, trees and blobs
"""

from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.git_data import GitDataOperations

__all__ = ["GitHubAPIClient", "GitDataOperations"]
