"""Service and business logic constants."""

# ============================================================================
# Git Object Configuration
# ============================================================================

# Mode for regular (non-executable) files in a git tree
GIT_FILE_MODE = "100644"

# Tree entry type for file content
GIT_BLOB_TYPE = "blob"

# Encoding used when uploading blob content
GIT_BLOB_ENCODING = "base64"

# ============================================================================
# HTTP Configuration
# ============================================================================

# Connect timeout for GitHub API requests (seconds)
GITHUB_CONNECT_TIMEOUT_SECONDS = 10.0

# GitHub REST API version header value
GITHUB_API_VERSION = "2022-11-28"

# ============================================================================
# Commit Log Configuration
# ============================================================================

# File name of the append-only commit audit log
COMMIT_LOG_FILENAME = "commits.log"

# Default number of log lines returned when reading the commit log
COMMIT_LOG_DEFAULT_LINES = 100

# Number of times a cycle is restarted after losing the genesis race
GENESIS_RACE_MAX_RETRIES = 1

__all__ = [
    'GIT_FILE_MODE',
    'GIT_BLOB_TYPE',
    'GIT_BLOB_ENCODING',
    'GITHUB_CONNECT_TIMEOUT_SECONDS',
    'GITHUB_API_VERSION',
    'COMMIT_LOG_FILENAME',
    'COMMIT_LOG_DEFAULT_LINES',
    'GENESIS_RACE_MAX_RETRIES',
]
