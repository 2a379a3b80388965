"""Routes package for FastAPI endpoints.

This package contains all API route modules for the plant survey service.
"""

from plant_survey.routes import answers, health, questions

__all__ = ["answers", "health", "questions"]
