"""
Configuration module for the remote commit engine.

Values are read from the environment (optionally populated from a .env file)
once at import time and exposed as module-level constants.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# GitHub Configuration
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_REPO = os.getenv("GITHUB_REPO", "")  # e.g. "username/repo"
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_API_TIMEOUT = float(os.getenv("GITHUB_API_TIMEOUT", "30"))

# GitHub repository defaults
GH_DEFAULT_OWNER = os.getenv("GH_DEFAULT_OWNER", GITHUB_REPO.partition("/")[0])
GH_DEFAULT_REPOSITORY = os.getenv("GH_DEFAULT_REPOSITORY", GITHUB_REPO.partition("/")[2])
CLIENT_GIT_BRANCH = os.getenv("CLIENT_GIT_BRANCH", "main")

# Local directories
STAGING_DIR = os.getenv("STAGING_DIR", os.path.join(os.getcwd(), "public"))
LOGS_DIR = os.getenv("LOGS_DIR", os.path.join(os.getcwd(), "logs"))

# Commit engine
COMMIT_CYCLE_TIMEOUT = float(os.getenv("COMMIT_CYCLE_TIMEOUT", "120"))
COMMIT_MISSING_FILE_POLICY = os.getenv("COMMIT_MISSING_FILE_POLICY", "skip").lower()
COMMIT_AUTHOR_NAME = os.getenv("COMMIT_AUTHOR_NAME")
COMMIT_AUTHOR_EMAIL = os.getenv("COMMIT_AUTHOR_EMAIL")
