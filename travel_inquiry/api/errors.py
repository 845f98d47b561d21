"""Error taxonomy for the submission pipeline.

Each error carries the HTTP status code it maps to at the handler boundary.
"""

from typing import Optional


class SubmissionError(Exception):
    """Base class for submission pipeline failures."""

    status_code: int = 500
    public_message: str = "Error processing submission. Please try again later."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.public_message)


class ValidationError(SubmissionError):
    """Missing or malformed required input.

    Attributes:
        errors: One entry per violated constraint
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[list[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or [message]


class PersistenceError(SubmissionError):
    """The submission could not be stored."""


class NotificationError(SubmissionError):
    """An email send failed. Recovered locally, never returned to callers."""

    def __init__(self, channel: str, message: str) -> None:
        super().__init__(f"{channel}: {message}")
        self.channel = channel


class UnexpectedError(SubmissionError):
    """Any other fault, such as an unparseable request body."""
