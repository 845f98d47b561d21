"""Data models for the submission pipeline.

This module defines Pydantic models for the inbound payload, the stored
submission record and the response returned to callers. Wire and storage
field names are camelCase; Python attributes are snake_case.
"""

import re
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from travel_inquiry.api.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MISSING_FIELDS_MESSAGE = "Missing required fields: name, email, and message are required"
INVALID_EMAIL_MESSAGE = "Invalid email address format"
SUCCESS_MESSAGE = "Form submitted successfully! We'll get back to you within 24 hours."
FAILURE_MESSAGE = "Error processing submission. Please try again later."

REQUIRED_FIELDS = ("name", "email", "message")


class SubmissionRequest(BaseModel):
    """Inbound contact form payload.

    Unknown keys are ignored. Scalar values are coerced to strings and blank
    strings collapse to None, so every field is either a non-empty string or
    None.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    destination: Optional[str] = None
    travel_date_start: Optional[str] = Field(default=None, alias="travelDateStart")
    travel_date_end: Optional[str] = Field(default=None, alias="travelDateEnd")
    travelers: Optional[str] = None
    message: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        """Normalize a raw field value.

        Args:
            value: Raw value from the payload

        Returns:
            The value as a string, or None when absent or blank

        Raises:
            ValueError: If the value is not a scalar
        """
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if not isinstance(value, str):
            raise ValueError("must be a string")
        return value if value.strip() else None

    @classmethod
    def from_payload(cls, payload: Any) -> "SubmissionRequest":
        """Validate an untrusted payload.

        Args:
            payload: Parsed JSON body

        Returns:
            Validated request

        Raises:
            ValidationError: If the payload is not an object, a required
                field is missing or the email address is malformed
        """
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object")

        try:
            request = cls.model_validate(dict(payload))
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ValidationError(f"Invalid field values: {'; '.join(errors)}", errors) from e

        missing = [field for field in REQUIRED_FIELDS if getattr(request, field) is None]
        if missing:
            raise ValidationError(
                MISSING_FIELDS_MESSAGE,
                [f"{field} is required" for field in missing],
            )

        if not EMAIL_PATTERN.match(request.email.strip()):
            raise ValidationError(INVALID_EMAIL_MESSAGE, ["email: invalid format"])

        return request


class Submission(BaseModel):
    """Stored contact inquiry.

    Attributes:
        id: Reference number, also the storage key
        name: Submitter's name
        email: Lower-cased, trimmed email address
        phone: Optional phone number
        destination: Optional destination
        travel_date_start: Optional start of the travel window
        travel_date_end: Optional end of the travel window
        travelers: Optional traveler count
        message: Message content
        submitted_at: ISO 8601 UTC timestamp assigned by the handler
        status: Lifecycle tag
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    destination: Optional[str] = None
    travel_date_start: Optional[str] = Field(default=None, alias="travelDateStart")
    travel_date_end: Optional[str] = Field(default=None, alias="travelDateEnd")
    travelers: Optional[str] = None
    message: str
    submitted_at: str = Field(alias="submittedAt")
    status: Literal["new"] = "new"

    @classmethod
    def build(
        cls, request: SubmissionRequest, submission_id: str, submitted_at: str
    ) -> "Submission":
        return cls(
            id=submission_id,
            name=request.name.strip(),
            email=request.email.strip().lower(),
            phone=request.phone,
            destination=request.destination,
            travel_date_start=request.travel_date_start,
            travel_date_end=request.travel_date_end,
            travelers=request.travelers,
            message=request.message,
            submitted_at=submitted_at,
        )

    def to_item(self) -> dict[str, Any]:
        """Storage representation with camelCase keys and explicit nulls."""
        return self.model_dump(by_alias=True)


class SubmissionResponse(BaseModel):
    """Response body returned to callers.

    Attributes:
        success: Whether the submission was stored
        message: Human-readable message about the result
        submission_id: Reference number (only on success)
        timestamp: Submission timestamp (only on success)
        errors: Violated constraints (only on validation failure)
        error: Internal error detail (development only)
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    submission_id: Optional[str] = Field(default=None, alias="submissionId")
    timestamp: Optional[str] = None
    errors: Optional[list[str]] = None
    error: Optional[str] = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class HandlerResponse(BaseModel):
    """Status code plus body, independent of the transport."""

    status_code: int
    body: SubmissionResponse

    @property
    def ok(self) -> bool:
        return self.status_code == 200
