"""Construction of handler collaborators from settings."""

import logging
from typing import Optional

from travel_inquiry.api.handler import SubmissionHandler
from travel_inquiry.api.notifier import EmailSender, InMemoryEmailSender, SESEmailSender
from travel_inquiry.api.storage import (
    DynamoDBStorageBackend,
    FileStorageBackend,
    InMemoryStorageBackend,
    StorageBackend,
)
from travel_inquiry.config import Settings, load_settings

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> StorageBackend:
    """Create the storage backend selected by the settings.

    Raises:
        ValueError: If DynamoDB is selected without a table name
    """
    if settings.storage_backend == "dynamodb":
        if not settings.table_name:
            raise ValueError("STORAGE_BACKEND=dynamodb requires TABLE_NAME")
        return DynamoDBStorageBackend.from_table_name(
            settings.table_name, settings.region, settings.email_index
        )
    if settings.storage_backend == "memory":
        return InMemoryStorageBackend()
    return FileStorageBackend(settings.storage_dir)


def build_sender(settings: Settings) -> EmailSender:
    if settings.email_backend == "memory":
        return InMemoryEmailSender()
    return SESEmailSender.from_region(settings.region)


def build_handler(settings: Optional[Settings] = None) -> SubmissionHandler:
    if settings is None:
        settings = load_settings()
    logging.getLogger("travel_inquiry").setLevel(settings.log_level)
    logger.info(
        "Environment check",
        extra={
            "table_name": "configured" if settings.table_name else "MISSING",
            "from_email": "configured" if settings.from_email else "MISSING",
            "to_email": "configured" if settings.to_email else "MISSING",
        },
    )
    return SubmissionHandler(build_storage(settings), build_sender(settings), settings)
