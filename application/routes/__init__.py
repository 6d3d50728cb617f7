"""
Application routes package.

Contains the API endpoint blueprints for staging files, publishing commits
and syncing from the published branch.
"""

from application.routes.commits import commits_bp
from application.routes.files import files_bp
from application.routes.repo import repo_bp

__all__ = ["commits_bp", "files_bp", "repo_bp"]
