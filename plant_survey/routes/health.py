"""Health check endpoint for monitoring and deployment verification.

This module provides a health check endpoint that verifies the application
is running and can connect to the database.
"""

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from plant_survey.dependencies import SessionFactory
from plant_survey.schemas.envelope import error_response, success_response
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=None)
async def health_check(session_factory: SessionFactory) -> Dict[str, Any] | JSONResponse:
    """Health check endpoint.

    Returns:
        Success envelope when the database answers ``SELECT 1``;
        503 error envelope otherwise

    Example response:
        {
            "success": true,
            "message": "Service healthy",
            "data": {"status": "healthy", "database": "connected"}
        }
    """
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content=error_response(
                "Service unavailable - database connection failed",
                {"database": "disconnected"},
            ),
        )

    logger.debug("Health check passed")
    return success_response({"status": "healthy", "database": "connected"}, "Service healthy")
