"""
Centralized error handling.

Converts exceptions that escape route handlers into the standard
``{"error": ...}`` response format.
"""

import logging

from quart import Quart

from application.routes.common.response import APIResponse
from application.services.commit_engine.errors import InvalidStagingPathError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Quart) -> None:
    """
    Register centralized error handlers for the application.

    Handles:
    - InvalidStagingPathError → 400 Bad Request
    - 404 / 405 → standardized responses
    - Exception (Generic) → 500 Internal Server Error
    """

    @app.errorhandler(InvalidStagingPathError)
    async def handle_invalid_path(error: InvalidStagingPathError):
        logger.warning(f"Rejected staging path: {error}")
        return APIResponse.error(str(error), 400)

    @app.errorhandler(404)
    async def handle_not_found(error):
        return APIResponse.not_found("Endpoint")

    @app.errorhandler(405)
    async def handle_method_not_allowed(error):
        return APIResponse.error("Method not allowed", 405)

    @app.errorhandler(Exception)
    async def handle_generic_exception(error: Exception):
        """
        Handle all uncaught exceptions.

        Logs full stack trace and hides implementation details.
        """
        logger.exception(f"Unhandled exception: {error}")
        return APIResponse.internal_error("An unexpected error occurred")
