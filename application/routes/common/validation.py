"""
Validation utilities for route handlers.

Provides decorators for automatic request validation using Pydantic models.
"""

import logging
from functools import wraps
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, ValidationError
from quart import request

from application.routes.common.response import APIResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def format_validation_errors(error: ValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into field/message/type dicts."""
    return [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def validate_json(model: Type[T]):
    """
    Decorator to validate JSON request body against Pydantic model.

    The validated instance is passed to the handler as ``data``.

    Example:
        >>> @validate_json(CommitRequest)
        >>> async def commit(data: CommitRequest):
        >>>     ...
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            json_data = await request.get_json(silent=True)
            if json_data is None:
                return APIResponse.error(
                    "Request body required", 400, details={"expected": "application/json"}
                )
            try:
                validated = model(**json_data)
            except ValidationError as e:
                errors = format_validation_errors(e)
                logger.warning(f"Validation error in {func.__name__}: {errors}")
                return APIResponse.error("Validation failed", 400, details={"errors": errors})
            return await func(*args, data=validated, **kwargs)

        return wrapper

    return decorator


def validate_query_params(model: Type[T]):
    """
    Decorator to validate query parameters against Pydantic model.

    The validated instance is passed to the handler as ``params``.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                validated = model(**request.args.to_dict())
            except ValidationError as e:
                errors = format_validation_errors(e)
                logger.warning(f"Query parameter validation error in {func.__name__}: {errors}")
                return APIResponse.error(
                    "Invalid query parameters", 400, details={"errors": errors}
                )
            return await func(*args, params=validated, **kwargs)

        return wrapper

    return decorator
