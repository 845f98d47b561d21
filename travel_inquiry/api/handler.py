"""Submission handler.

This module implements the submission pipeline: parse and validate the
payload, build the record, store it, then send the customer confirmation
and the business notification. Every failure is converted to a structured
response here; nothing raises past ``SubmissionHandler.handle``.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable

from travel_inquiry.api.emails import (
    EmailContent,
    render_business_notification,
    render_customer_confirmation,
)
from travel_inquiry.api.errors import (
    PersistenceError,
    SubmissionError,
    UnexpectedError,
    ValidationError,
)
from travel_inquiry.api.ids import generate_submission_id
from travel_inquiry.api.models import (
    FAILURE_MESSAGE,
    SUCCESS_MESSAGE,
    HandlerResponse,
    Submission,
    SubmissionRequest,
    SubmissionResponse,
)
from travel_inquiry.api.notifier import EmailMessage, EmailSender
from travel_inquiry.api.storage import StorageBackend
from travel_inquiry.config import Settings

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """ISO 8601 UTC with millisecond precision and a Z suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class SubmissionHandler:
    """Runs one submission through validation, storage and notification.

    Attributes:
        storage: Where submissions are persisted
        sender: Email delivery backend
        settings: Resolved configuration
    """

    def __init__(
        self,
        storage: StorageBackend,
        sender: EmailSender,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[int], str] = generate_submission_id,
    ) -> None:
        self.storage = storage
        self.sender = sender
        self.settings = settings
        self.clock = clock
        self.id_factory = id_factory

    async def handle(self, payload: Any) -> HandlerResponse:
        """Process one submission.

        Args:
            payload: Parsed JSON object, or the raw JSON request body

        Returns:
            HandlerResponse with status 200, 400 or 500
        """
        try:
            request = SubmissionRequest.from_payload(self._parse(payload))
            submission = self._build(request)
            await self._persist(submission)
        except ValidationError as e:
            logger.warning("Submission rejected: %s", e, extra={"errors": e.errors})
            return HandlerResponse(
                status_code=e.status_code,
                body=SubmissionResponse(success=False, message=str(e), errors=e.errors),
            )
        except PersistenceError as e:
            logger.error("Failed to store submission", exc_info=True)
            return self._failure(e)
        except Exception as e:
            logger.error("Error processing submission", exc_info=True)
            return self._failure(e)

        await self._notify(submission)

        return HandlerResponse(
            status_code=200,
            body=SubmissionResponse(
                success=True,
                message=SUCCESS_MESSAGE,
                submission_id=submission.id,
                timestamp=submission.submitted_at,
            ),
        )

    def _parse(self, payload: Any) -> Any:
        if payload is None:
            raise UnexpectedError("Request body is empty")
        if isinstance(payload, (str, bytes, bytearray)):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                raise UnexpectedError(f"Malformed request body: {e}") from e
            if payload is None:
                raise UnexpectedError("Request body is null")
        return payload

    def _build(self, request: SubmissionRequest) -> Submission:
        moment = self.clock()
        submission_id = self.id_factory(int(moment.timestamp() * 1000))
        return Submission.build(request, submission_id, to_iso(moment))

    async def _persist(self, submission: Submission) -> None:
        logger.info("Saving submission", extra={"submission_id": submission.id})
        try:
            await self.storage.save(submission)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"{type(e).__name__}: {e}") from e
        logger.info("Submission saved", extra={"submission_id": submission.id})

    async def _notify(self, submission: Submission) -> None:
        """Send both emails. Failures are logged and never escalate."""
        settings = self.settings
        sends = []

        if settings.customer_email_configured:
            sends.append(
                self._deliver(
                    "customer",
                    [submission.email],
                    lambda: render_customer_confirmation(submission, settings.brand_name),
                    submission.id,
                )
            )
        else:
            logger.warning("Skipping customer email - FROM_EMAIL not configured")

        if settings.business_email_configured:
            sends.append(
                self._deliver(
                    "business",
                    [settings.to_email],
                    lambda: render_business_notification(submission),
                    submission.id,
                )
            )
        else:
            logger.warning("Skipping business email - FROM_EMAIL or TO_EMAIL not configured")

        outcomes = await asyncio.gather(*sends)
        logger.info(
            "Notification outcomes",
            extra={"submission_id": submission.id, "outcomes": dict(outcomes)},
        )

    async def _deliver(
        self,
        channel: str,
        recipients: list[str],
        render: Callable[[], EmailContent],
        submission_id: str,
    ) -> tuple[str, bool]:
        try:
            message = EmailMessage(
                source=self.settings.from_email,
                to_addresses=recipients,
                content=render(),
                channel=channel,
            )
            await self.sender.send(message)
        except Exception:
            logger.error(
                "Email sending failed, but submission was saved",
                extra={"submission_id": submission_id, "channel": channel},
                exc_info=True,
            )
            return channel, False

        logger.info("%s email sent", channel.capitalize(), extra={"submission_id": submission_id})
        return channel, True

    def _failure(self, error: Exception) -> HandlerResponse:
        status_code = error.status_code if isinstance(error, SubmissionError) else 500
        return HandlerResponse(
            status_code=status_code,
            body=SubmissionResponse(
                success=False,
                message=FAILURE_MESSAGE,
                error=str(error) if self.settings.is_development else None,
            ),
        )
