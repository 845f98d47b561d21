"""Submission pipeline for travel inquiries.

The HTTP application lives in ``travel_inquiry.api.app`` and the Lambda
entry point in ``travel_inquiry.api.lambda_function``.
"""

from travel_inquiry.api.errors import (
    NotificationError,
    PersistenceError,
    SubmissionError,
    UnexpectedError,
    ValidationError,
)
from travel_inquiry.api.handler import SubmissionHandler
from travel_inquiry.api.models import HandlerResponse, Submission, SubmissionResponse

__all__ = [
    "HandlerResponse",
    "NotificationError",
    "PersistenceError",
    "Submission",
    "SubmissionError",
    "SubmissionHandler",
    "SubmissionResponse",
    "UnexpectedError",
    "ValidationError",
]
