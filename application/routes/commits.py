"""
Commit Routes

Publish pending staged files as a single commit, compare the staging area
with the published branch, and read the commit audit log.
"""

import logging

from quart import Blueprint

from application.routes.common.response import APIResponse
from application.routes.common.validation import validate_json, validate_query_params
from application.routes.models import CommitLogParams, CommitRequest, DiffParams
from application.services.commit_engine.commit_service import get_commit_service
from application.services.commit_engine.errors import InconsistentRemoteStateError
from application.services.github.api.errors import GitHubAPIError, GitHubTransportError

logger = logging.getLogger(__name__)

commits_bp = Blueprint("commits", __name__, url_prefix="/api/v1/commits")


@commits_bp.route("", methods=["POST"])
@validate_json(CommitRequest)
async def commit_changes(data: CommitRequest):
    """
    Commit all pending changes.

    Request body:
        {"commit_message": "Update homepage", "dry_run": false}

    Returns:
        200: Publish result (committed or nothing_to_publish), or the
             pending change list for a dry run
        409: Branch moved concurrently, retry later
        422: A staged file is missing under the strict policy
        502: Remote repository is in an unexpected state
        503: GitHub unreachable or timed out, retry later
    """
    service = get_commit_service()
    if data.dry_run:
        return APIResponse.success({"success": True, "changes": service.pending_changes()})

    result = await service.publish(data.commit_message)
    return APIResponse.publish_result(result)


@commits_bp.route("/diff", methods=["GET"])
@validate_query_params(DiffParams)
async def diff(params: DiffParams):
    """
    Compare staged files with the files on the branch head.

    Returns:
        200: {"added": [...], "deleted": [...], "modified": [...], "head_sha": "..."}
        502: GitHub request failed
    """
    try:
        result = await get_commit_service().diff(remote_prefix=params.prefix)
    except (GitHubAPIError, GitHubTransportError, InconsistentRemoteStateError) as e:
        logger.error(f"Failed to diff against remote: {e}")
        return APIResponse.error(str(e), 502)
    return APIResponse.success(result.to_dict())


@commits_bp.route("/logs", methods=["GET"])
@validate_query_params(CommitLogParams)
async def commit_logs(params: CommitLogParams):
    """
    Read the commit audit log, newest first.

    Returns:
        200: {"logs": [...]}
    """
    logs = get_commit_service().read_commit_log(lines=params.lines, search=params.search)
    return APIResponse.success({"logs": logs})


@commits_bp.route("/status", methods=["GET"])
async def status():
    """
    Report repository, branch and pending change counts.

    Returns:
        200: {"repo": "...", "branch": "...", "pending_changes": 0, ...}
    """
    return APIResponse.success(get_commit_service().status())
