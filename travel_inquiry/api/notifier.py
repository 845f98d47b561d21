"""Email delivery for submission notifications."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from travel_inquiry.api.emails import EmailContent
from travel_inquiry.api.errors import NotificationError

logger = logging.getLogger(__name__)

CHARSET = "UTF-8"


@dataclass(frozen=True)
class EmailMessage:
    """One outbound email.

    Attributes:
        source: Sender address
        to_addresses: Recipient addresses
        content: Subject and bodies
        channel: Label used in logs ("customer" or "business")
    """

    source: str
    to_addresses: list[str]
    content: EmailContent
    channel: str = "email"


class EmailSender(Protocol):
    """Protocol for email delivery backends."""

    async def send(self, message: EmailMessage) -> str:
        """Send one email.

        Args:
            message: The email to send

        Returns:
            Provider message id

        Raises:
            NotificationError: If the provider rejected the message
        """
        ...


class SESEmailSender:
    """Amazon SES sender using ``send_email`` with HTML and text bodies."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_region(cls, region: str) -> "SESEmailSender":
        return cls(boto3.client("ses", region_name=region))

    async def send(self, message: EmailMessage) -> str:
        try:
            response = await asyncio.to_thread(
                self.client.send_email,
                Source=message.source,
                Destination={"ToAddresses": list(message.to_addresses)},
                Message={
                    "Subject": {"Data": message.content.subject, "Charset": CHARSET},
                    "Body": {
                        "Html": {"Data": message.content.html, "Charset": CHARSET},
                        "Text": {"Data": message.content.text, "Charset": CHARSET},
                    },
                },
            )
        except (ClientError, BotoCoreError) as e:
            raise NotificationError(message.channel, str(e)) from e

        return response.get("MessageId", "")


@dataclass
class InMemoryEmailSender:
    """Sender that keeps messages in a list. Used by tests and local runs."""

    outbox: list[EmailMessage] = field(default_factory=list)

    async def send(self, message: EmailMessage) -> str:
        self.outbox.append(message)
        logger.info(
            "Captured email",
            extra={"channel": message.channel, "to": message.to_addresses},
        )
        return f"memory-{len(self.outbox)}"
