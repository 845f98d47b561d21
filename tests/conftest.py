"""Pytest configuration and shared fixtures"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator
import tempfile

import pytest

from travel_inquiry.api.handler import SubmissionHandler
from travel_inquiry.api.notifier import InMemoryEmailSender
from travel_inquiry.api.storage import InMemoryStorageBackend
from travel_inquiry.config import Settings

FIXED_NOW = datetime(2026, 10, 18, 15, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings() -> Settings:
    """Settings with both email addresses configured and in-memory backends"""
    return Settings(
        from_email="noreply@travelwithease.example",
        to_email="bookings@travelwithease.example",
        storage_backend="memory",
        email_backend="memory",
    )


@pytest.fixture
def storage() -> InMemoryStorageBackend:
    return InMemoryStorageBackend()


@pytest.fixture
def sender() -> InMemoryEmailSender:
    return InMemoryEmailSender()


@pytest.fixture
def handler(storage, sender, settings) -> SubmissionHandler:
    """Handler wired to in-memory collaborators and a fixed clock"""
    return SubmissionHandler(storage, sender, settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def valid_payload() -> dict:
    return {
        "name": "John Doe",
        "email": "JOHN@Example.com",
        "phone": "+1 555 0100",
        "destination": "Lisbon",
        "travelDateStart": "2026-12-01",
        "travelDateEnd": "2026-12-10",
        "travelers": "2",
        "message": "Hi\nWe would like a city break.",
    }
