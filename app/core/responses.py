"""
Standardized API response utilities.

This module provides reusable utilities for building consistent API responses
across all endpoints. All responses follow the standard format:
{
    "success": bool,
    "status_code": int,
    "message": str,
    "data": Any | None
}
"""

from collections.abc import Sequence
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

# Location prefixes FastAPI puts in front of the field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def success_response(
    status_code: int = status.HTTP_200_OK,
    message: str = "Operation successful",
    data: Any = None,
) -> JSONResponse:
    """
    Create a standardized success response.

    Args:
        status_code: HTTP status code (200, 201, etc.)
        message: Success message
        data: Response data payload

    Returns:
        JSONResponse with standard format
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "status_code": status_code,
            "message": message,
            "data": data,
        },
    )


def error_response(
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    message: str = "An error occurred",
    data: Any = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        status_code: HTTP error status code (400, 401, 403, 404, 500, etc.)
        message: Error message
        data: Optional error details

    Returns:
        JSONResponse with standard format
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "status_code": status_code,
            "message": message,
            "data": data,
        },
    )


def validation_error_response(
    message: str,
    errors: dict[str, list[str]] | None = None,
) -> JSONResponse:
    """
    Create a standardized validation error response.

    Args:
        message: Primary validation error message
        errors: Optional mapping of field name to its error messages

    Returns:
        JSONResponse with standard format (400 status)

    Example:
        return validation_error_response(
            message="One or more validation errors occurred",
            errors={"email": ["value is not a valid email address"]},
        )
    """
    return error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message=message,
        data={"errors": errors} if errors else None,
    )


def _field_name(error: dict[str, Any]) -> str:
    # Unparseable bodies report a character offset, not a field
    if error.get("type") == "json_invalid":
        return "body"
    parts = list(error.get("loc", ()))
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    if not parts or isinstance(parts[0], int):
        return "body"
    return ".".join(str(part) for part in parts)


def _error_message(error: dict[str, Any]) -> str:
    ctx = error.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "Validation failed")


def format_validation_errors(errors: Sequence[dict[str, Any]]) -> dict[str, list[str]]:
    """
    Group pydantic/FastAPI validation errors by field.

    Args:
        errors: Error dicts as returned by ``RequestValidationError.errors()``

    Returns:
        Mapping of field name to the list of messages for that field
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(_field_name(error), []).append(_error_message(error))
    return grouped
