"""Contact form API endpoints.

This module exposes the submission handler over HTTP, plus read endpoints
for stored submissions.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from travel_inquiry.api.handler import SubmissionHandler
from travel_inquiry.api.models import Submission

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1", tags=["contact"])


def get_submission_handler(request: Request) -> SubmissionHandler:
    """Return the handler attached to the application state."""
    return request.app.state.handler


HandlerDep = Annotated[SubmissionHandler, Depends(get_submission_handler)]


@router.post(
    "/contact",
    responses={
        200: {
            "description": "Submission stored",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Form submitted successfully! We'll get back to you within 24 hours.",
                        "submissionId": "sub_1760781296789_k3j9x0a2b",
                        "timestamp": "2026-10-18T09:54:56.789Z",
                    }
                }
            },
        },
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Invalid email address format",
                        "errors": ["email: invalid format"],
                    }
                }
            },
        },
        500: {
            "description": "Storage or unexpected failure",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Error processing submission. Please try again later.",
                    }
                }
            },
        },
    },
    summary="Submit a travel inquiry",
    description="""
    Submit a contact form with name, email and message, plus optional phone,
    destination, travelDateStart, travelDateEnd and travelers.

    The submission is stored first. A confirmation is then emailed to the
    submitter and a notification to the business inbox; email failures do
    not change the response.
    """,
)
async def submit_contact_form(request: Request, handler: HandlerDep) -> JSONResponse:
    """Submit a contact form.

    Args:
        request: FastAPI request object (the raw body is passed to the handler)
        handler: Submission handler

    Returns:
        JSONResponse with the handler's status code and body
    """
    body = await request.body()
    result = await handler.handle(body)
    return JSONResponse(status_code=result.status_code, content=result.body.to_body())


@router.get(
    "/contact/{submission_id}",
    response_model=Submission,
    response_model_by_alias=True,
    responses={404: {"description": "Submission not found"}},
    summary="Get a submission by ID",
)
async def get_contact_form(submission_id: str, handler: HandlerDep) -> Submission:
    """Get a submission by its reference number.

    Raises:
        HTTPException: If submission not found
    """
    submission = await handler.storage.get(submission_id)
    if submission is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Submission {submission_id} not found",
        )
    return submission


@router.get(
    "/contact",
    response_model=list[Submission],
    response_model_by_alias=True,
    summary="List submissions for an email address",
    description="List submissions made from one email address, newest first.",
)
async def list_contact_forms(
    handler: HandlerDep,
    email: Annotated[Optional[str], Query(min_length=3)] = None,
) -> list[Submission]:
    """List submissions for an email address.

    Raises:
        HTTPException: If no email was given
    """
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The email query parameter is required",
        )
    return await handler.storage.find_by_email(email)
