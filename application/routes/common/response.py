"""
Response utilities for standardized API responses.

Provides consistent response formatting across all routes.
"""

from typing import Any, Dict, Tuple

from quart import Response, jsonify

from application.services.commit_engine.models import ErrorKind, PublishResult

# HTTP status returned for each failed-publish error kind
PUBLISH_ERROR_STATUS = {
    ErrorKind.CONFLICT: 409,
    ErrorKind.TRANSIENT: 503,
    ErrorKind.FATAL: 502,
    ErrorKind.INPUT: 422,
}


class APIResponse:
    """
    Standardized API response helper.

    Ensures consistent response format across all endpoints.
    """

    @staticmethod
    def success(data: Any, status: int = 200) -> Tuple[Response, int]:
        """
        Create a successful response.

        Example:
            >>> return APIResponse.success({"files": files})
        """
        return jsonify(data), status

    @staticmethod
    def error(
        message: str,
        status: int = 400,
        details: Any = None,
        error_code: str = None,
    ) -> Tuple[Response, int]:
        """
        Create an error response.

        Args:
            message: Error message
            status: HTTP status code (default: 400)
            details: Additional error details (optional)
            error_code: Error code for client-side handling (optional)

        Example:
            >>> return APIResponse.error("Missing filename.", 400)
        """
        error_data: Dict[str, Any] = {"error": message}
        if details is not None:
            error_data["details"] = details
        if error_code is not None:
            error_data["error_code"] = error_code
        return jsonify(error_data), status

    @staticmethod
    def not_found(resource: str = "Resource") -> Tuple[Response, int]:
        """Create a 404 Not Found response."""
        return APIResponse.error(f"{resource} not found", 404)

    @staticmethod
    def internal_error(message: str = "Internal server error") -> Tuple[Response, int]:
        """Create a 500 Internal Server Error response."""
        return APIResponse.error(message, 500)

    @staticmethod
    def publish_result(result: PublishResult) -> Tuple[Response, int]:
        """
        Render a publish cycle outcome.

        Committed and nothing-to-publish outcomes are 200; failures map the
        error kind to a status so clients can tell "retry later" (409/503)
        from a broken remote (502).
        """
        if result.success:
            return jsonify(result.to_dict()), 200
        status = PUBLISH_ERROR_STATUS.get(result.error.kind, 500)
        return jsonify(result.to_dict()), status
