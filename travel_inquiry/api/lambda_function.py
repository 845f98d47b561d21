"""AWS Lambda entry point.

Translates an API Gateway proxy event into a handler call and the handler
result into a proxy response. Handler dependencies are built once per
process and reused across warm invocations.
"""

import asyncio
import base64
import binascii
import json
import logging
from functools import lru_cache
from typing import Any

from travel_inquiry.api.dependencies import build_handler
from travel_inquiry.api.handler import SubmissionHandler
from travel_inquiry.api.models import FAILURE_MESSAGE

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_handler() -> SubmissionHandler:
    """Process-wide handler, created on first invocation."""
    return build_handler()


def extract_body(event: dict[str, Any]) -> Any:
    """Return the request body from a proxy event, decoding base64 bodies.

    Raises:
        ValueError: If a base64 body cannot be decoded
    """
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError(f"Undecodable base64 body: {e}") from e
    return body


def format_response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    """Format an API Gateway proxy response."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entry point for contact form submissions."""
    request_id = getattr(context, "aws_request_id", None)
    logger.info("Received event", extra={"request_id": request_id})

    try:
        handler = get_handler()
        body = extract_body(event)
    except Exception:
        logger.error("Error processing submission", exc_info=True)
        return format_response(500, {"success": False, "message": FAILURE_MESSAGE})

    result = asyncio.run(handler.handle(body))
    return format_response(result.status_code, result.body.to_body())
