"""
Staging Routes

Create, read, delete and list files in the local staging area. Every write
or delete marks the path as pending for the next commit.
"""

import base64
import binascii
import logging

from quart import Blueprint

from application.routes.common.response import APIResponse
from application.routes.common.validation import validate_json, validate_query_params
from application.routes.models import FilePathParams, ListFilesParams, WriteFileRequest
from application.services.commit_engine.commit_service import get_commit_service

logger = logging.getLogger(__name__)

files_bp = Blueprint("files", __name__, url_prefix="/api/v1/files")


@files_bp.route("/file", methods=["POST"])
@validate_json(WriteFileRequest)
async def write_file(data: WriteFileRequest):
    """
    Create or overwrite a staged file.

    Request body:
        {"filename": "index.html", "content": "...", "base64": false}

    Returns:
        200: {"success": true, "file": "index.html"}
        400: Invalid filename or content
    """
    if data.base64:
        try:
            content = base64.b64decode(data.content, validate=True)
        except binascii.Error:
            return APIResponse.error("Invalid base64 content.", 400)
    else:
        content = data.content.encode("utf-8")

    path = get_commit_service().write_file(data.filename, content)
    return APIResponse.success({"success": True, "file": path})


@files_bp.route("/file", methods=["GET"])
@validate_query_params(FilePathParams)
async def read_file(params: FilePathParams):
    """
    Read a staged file as UTF-8 text (base64 when not decodable).

    Returns:
        200: {"filename": "...", "content": "...", "base64": false}
        404: File not found
    """
    content = get_commit_service().read_file(params.filename)
    if content is None:
        return APIResponse.not_found("File")
    try:
        return APIResponse.success(
            {"filename": params.filename, "content": content.decode("utf-8"), "base64": False}
        )
    except UnicodeDecodeError:
        return APIResponse.success(
            {
                "filename": params.filename,
                "content": base64.b64encode(content).decode("ascii"),
                "base64": True,
            }
        )


@files_bp.route("/file", methods=["DELETE"])
@validate_query_params(FilePathParams)
async def delete_file(params: FilePathParams):
    """
    Delete a staged file.

    Returns:
        200: {"success": true, "deleted": "..."}
        404: File not found
    """
    if not get_commit_service().delete_file(params.filename):
        return APIResponse.not_found("File")
    return APIResponse.success({"success": True, "deleted": params.filename})


@files_bp.route("", methods=["GET"])
@validate_query_params(ListFilesParams)
async def list_files(params: ListFilesParams):
    """
    List staged files, optionally under ``dir`` and ending with ``filter``.

    Returns:
        200: {"files": [...]}
    """
    files = get_commit_service().list_files(directory=params.dir, suffix=params.filter)
    return APIResponse.success({"files": files})
