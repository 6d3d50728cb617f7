"""
Repository Routes

Report the latest commit on the integration branch and sync the published
files back into the staging area.
"""

import logging
from dataclasses import asdict

from quart import Blueprint

from application.routes.common.response import APIResponse
from application.routes.common.validation import validate_query_params
from application.routes.models import SyncParams
from application.services.commit_engine.commit_service import get_commit_service
from application.services.commit_engine.errors import InconsistentRemoteStateError
from application.services.github.api.errors import GitHubAPIError, GitHubTransportError

logger = logging.getLogger(__name__)

repo_bp = Blueprint("repo", __name__, url_prefix="/api/v1/repo")

REMOTE_ERRORS = (GitHubAPIError, GitHubTransportError, InconsistentRemoteStateError)


@repo_bp.route("", methods=["GET"])
async def latest_commit():
    """
    Latest commit on the integration branch.

    Returns:
        200: {"latest_commit": {"sha": "...", "message": "...", ...} | null}
        502: GitHub request failed
    """
    try:
        commit = await get_commit_service().latest_commit()
    except REMOTE_ERRORS as e:
        logger.error(f"Failed to read latest commit: {e}")
        return APIResponse.error(str(e), 502)
    return APIResponse.success({"latest_commit": asdict(commit) if commit else None})


@repo_bp.route("", methods=["POST"])
@validate_query_params(SyncParams)
async def sync(params: SyncParams):
    """
    Download the files on the branch head into the staging area.

    Files with pending local changes are not overwritten.

    Returns:
        200: {"success": true, "synced": [...], "kept": [...], "head_sha": "..."}
        502: GitHub request failed
    """
    try:
        result = await get_commit_service().sync_from_remote(remote_prefix=params.prefix)
    except REMOTE_ERRORS as e:
        logger.error(f"Failed to sync from remote: {e}")
        return APIResponse.error(str(e), 502)
    return APIResponse.success(result.to_dict())
