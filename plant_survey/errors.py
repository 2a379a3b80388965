"""Error taxonomy for the survey recommendation service.

Every error carries the HTTP status it maps to at the boundary and an
optional ``errors`` mapping with field-level detail. Handlers in
``plant_survey.main`` turn them into the standard response envelope.
"""

from typing import Any, Dict, Optional


class PlantSurveyError(Exception):
    """Base class for errors recovered at the HTTP boundary."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, Any]] = None
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class SubmissionValidationError(PlantSurveyError):
    """Raised when a survey submission is malformed."""

    status_code = 400
    default_message = "Validation failed"


class TranslationError(PlantSurveyError):
    """Raised when language detection or translation fails."""

    status_code = 500
    default_message = "Failed to normalize answer language"


class ResponseNotFoundError(PlantSurveyError):
    """Raised when a survey response is unknown or has no answers."""

    status_code = 404
    default_message = "No answers found for this responseId"

    def __init__(self, response_id: str):
        self.response_id = response_id
        super().__init__(errors={"responseId": response_id})


class UnknownError(PlantSurveyError):
    """Wraps an unexpected exception.

    The original exception is kept for logging and never shown to callers.
    """

    status_code = 500
    default_message = "An unexpected error occurred. Please try again later."

    def __init__(self, original: BaseException):
        self.original = original
        super().__init__()
