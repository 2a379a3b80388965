"""Uniform response envelope used by every endpoint.

Successful responses look like ``{"success": true, "message": ..., "data": ...}``;
failures like ``{"success": false, "message": ..., "errors": {...}}``.
"""

from typing import Any, Dict, Optional


def success_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Build a success envelope.

    Args:
        data: Payload returned to the client
        message: Human-readable description of the outcome

    Returns:
        Envelope dictionary
    """
    return {
        "success": True,
        "message": message,
        "data": data,
    }


def error_response(
    message: str = "Error occurred",
    errors: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Build an error envelope.

    Args:
        message: Human-readable description of the failure
        errors: Optional field-level or diagnostic detail

    Returns:
        Envelope dictionary (``errors`` omitted when empty)
    """
    response: Dict[str, Any] = {
        "success": False,
        "message": message,
    }
    if errors:
        response["errors"] = errors
    return response
