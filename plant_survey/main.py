"""FastAPI application entry point for the plant survey service.

This module initializes the FastAPI application, sets up logging, creates
tables, registers routers, and maps errors to the response envelope.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plant_survey.config import get_settings
from plant_survey.errors import PlantSurveyError, SubmissionValidationError, UnknownError
from plant_survey.logging_config import setup_logging, get_logger
from plant_survey.models.database import engine, init_models
from plant_survey.routes import answers, health, questions
from plant_survey.schemas.envelope import error_response

# Initialize logger (will be configured during startup)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Startup:
    - Configure logging
    - Create missing tables

    Shutdown:
    - Dispose of the database engine

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    # Startup
    settings = get_settings()
    setup_logging()

    logger.info(
        f"Plant survey service starting - "
        f"Environment: {settings.environment}, "
        f"Log Level: {settings.log_level}, "
        f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'configured'}"
    )

    await init_models()

    yield

    # Shutdown
    logger.info("Plant survey service shutting down")
    await engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title="Plant Survey Service",
    description="Turns plant-care survey answers into plant and partner recommendations",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Register routers
app.include_router(health.router, tags=["Health"])
app.include_router(questions.router, tags=["Questions"])
app.include_router(answers.router, tags=["Answers"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 with field-level issues."""
    issues = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.info(f"Rejected invalid request to {request.url.path}: {len(issues)} issues")

    error = SubmissionValidationError(errors={"issues": issues})
    return JSONResponse(
        status_code=error.status_code,
        content=error_response(error.message, error.errors)
    )


@app.exception_handler(PlantSurveyError)
async def plant_survey_exception_handler(request: Request, exc: PlantSurveyError) -> JSONResponse:
    """Map domain errors to their status code and the error envelope."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} for {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} for {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, exc.errors)
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled exceptions.

    Logs the original exception with its traceback and returns a generic
    error to prevent leaking sensitive information.

    Args:
        request: FastAPI request object
        exc: Exception that was raised

    Returns:
        JSONResponse: Generic error response
    """
    error = UnknownError(exc)
    logger.error(
        f"Unhandled exception for {request.method} {request.url}: {exc}",
        exc_info=exc
    )

    return JSONResponse(
        status_code=error.status_code,
        content=error_response(error.message)
    )
