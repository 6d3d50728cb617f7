"""
Application services package.

Contains business logic services for the commit engine application.
"""

from application.services.commit_engine.commit_service import CommitService, get_commit_service

__all__ = [
    "CommitService",
    "get_commit_service",
]
