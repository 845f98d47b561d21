"""Storage backends for travel inquiry submissions.

This module provides DynamoDB, file-based and in-memory storage. Every
backend stores one record per submission keyed by ``id`` and supports
lookup by ``email``.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

import aiofiles
import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from travel_inquiry.api.errors import PersistenceError
from travel_inquiry.api.models import Submission

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    """Protocol for submission storage backends."""

    async def save(self, submission: Submission) -> None:
        """Store a submission, overwriting any record with the same id.

        Args:
            submission: The submission to store

        Raises:
            PersistenceError: If the write was not acknowledged
        """
        ...

    async def get(self, submission_id: str) -> Optional[Submission]:
        """Retrieve a submission by ID.

        Args:
            submission_id: The unique submission ID

        Returns:
            The submission if found, None otherwise
        """
        ...

    async def find_by_email(self, email: str) -> list[Submission]:
        """List submissions made from an email address, newest first.

        Args:
            email: Submitter email (matched case-insensitively)
        """
        ...


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class DynamoDBStorageBackend:
    """DynamoDB storage backend.

    Items are written with ``put_item`` keyed by ``id``. Email lookups go
    through a global secondary index whose partition key is ``email``.

    Attributes:
        table: boto3 Table resource
        email_index: Name of the email GSI
    """

    def __init__(self, table: Any, email_index: str = "email-index") -> None:
        self.table = table
        self.email_index = email_index

    @classmethod
    def from_table_name(
        cls, table_name: str, region: str, email_index: str = "email-index"
    ) -> "DynamoDBStorageBackend":
        dynamodb = boto3.resource("dynamodb", region_name=region)
        return cls(dynamodb.Table(table_name), email_index=email_index)

    async def save(self, submission: Submission) -> None:
        try:
            await asyncio.to_thread(self.table.put_item, Item=submission.to_item())
        except (ClientError, BotoCoreError) as e:
            raise PersistenceError(f"DynamoDB put_item failed: {e}") from e

    async def get(self, submission_id: str) -> Optional[Submission]:
        try:
            response = await asyncio.to_thread(
                self.table.get_item, Key={"id": submission_id}
            )
        except (ClientError, BotoCoreError) as e:
            raise PersistenceError(f"DynamoDB get_item failed: {e}") from e

        item = response.get("Item")
        if item is None:
            return None
        return Submission.model_validate(item)

    async def find_by_email(self, email: str) -> list[Submission]:
        params: dict[str, Any] = {
            "IndexName": self.email_index,
            "KeyConditionExpression": Key("email").eq(_normalize_email(email)),
        }
        items: list[dict[str, Any]] = []
        while True:
            try:
                response = await asyncio.to_thread(self.table.query, **params)
            except (ClientError, BotoCoreError) as e:
                raise PersistenceError(f"DynamoDB query failed: {e}") from e

            items.extend(response.get("Items", []))
            if "LastEvaluatedKey" not in response:
                break
            params["ExclusiveStartKey"] = response["LastEvaluatedKey"]

        submissions = [Submission.model_validate(item) for item in items]
        submissions.sort(key=lambda x: x.submitted_at, reverse=True)
        return submissions


class FileStorageBackend:
    """File-based storage backend for local development.

    Stores each submission as a separate JSON file in the configured directory.

    Attributes:
        storage_dir: Directory where submissions are stored
    """

    def __init__(self, storage_dir: Path | str = ".travel_inquiry/submissions") -> None:
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    async def save(self, submission: Submission) -> None:
        file_path = self.storage_dir / f"{submission.id}.json"
        try:
            async with aiofiles.open(file_path, mode="w", encoding="utf-8") as f:
                await f.write(json.dumps(submission.to_item(), indent=2, ensure_ascii=False))
        except OSError as e:
            raise PersistenceError(f"Could not write {file_path}: {e}") from e

    async def _read(self, file_path: Path) -> Optional[Submission]:
        try:
            async with aiofiles.open(file_path, mode="r", encoding="utf-8") as f:
                content = await f.read()
            return Submission.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValueError):
            logger.warning("Skipping unreadable submission file %s", file_path)
            return None

    async def get(self, submission_id: str) -> Optional[Submission]:
        file_path = self.storage_dir / f"{submission_id}.json"
        if not file_path.exists():
            return None
        return await self._read(file_path)

    async def find_by_email(self, email: str) -> list[Submission]:
        email = _normalize_email(email)
        submissions = []
        for file_path in self.storage_dir.glob("*.json"):
            submission = await self._read(file_path)
            if submission is not None and submission.email == email:
                submissions.append(submission)

        submissions.sort(key=lambda x: x.submitted_at, reverse=True)
        return submissions


class InMemoryStorageBackend:
    """In-memory storage backend.

    Useful for testing or temporary storage. Data is lost on process restart.
    """

    def __init__(self) -> None:
        self._storage: dict[str, Submission] = {}

    @property
    def submissions(self) -> list[Submission]:
        return list(self._storage.values())

    async def save(self, submission: Submission) -> None:
        self._storage[submission.id] = submission

    async def get(self, submission_id: str) -> Optional[Submission]:
        return self._storage.get(submission_id)

    async def find_by_email(self, email: str) -> list[Submission]:
        email = _normalize_email(email)
        submissions = [s for s in self._storage.values() if s.email == email]
        submissions.sort(key=lambda x: x.submitted_at, reverse=True)
        return submissions
