"""Test storage backends"""
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from travel_inquiry.api.errors import PersistenceError
from travel_inquiry.api.models import Submission
from travel_inquiry.api.storage import (
    DynamoDBStorageBackend,
    FileStorageBackend,
    InMemoryStorageBackend,
)


def make_submission(submission_id="sub_1_aaa", email="ann@b.com", submitted_at="2026-10-18T10:00:00.000Z"):
    return Submission(
        id=submission_id,
        name="Ann",
        email=email,
        message="x",
        submitted_at=submitted_at,
    )


def client_error(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
        operation,
    )


class TestInMemoryStorageBackend:
    """Test in-memory backend"""

    @pytest.mark.asyncio
    async def test_save_and_get(self):
        storage = InMemoryStorageBackend()
        submission = make_submission()

        await storage.save(submission)

        assert await storage.get("sub_1_aaa") == submission
        assert await storage.get("missing") is None

    @pytest.mark.asyncio
    async def test_find_by_email_newest_first(self):
        storage = InMemoryStorageBackend()
        await storage.save(make_submission("sub_1_aaa", submitted_at="2026-10-18T10:00:00.000Z"))
        await storage.save(make_submission("sub_2_bbb", submitted_at="2026-10-18T11:00:00.000Z"))
        await storage.save(make_submission("sub_3_ccc", email="other@b.com"))

        found = await storage.find_by_email(" ANN@b.com ")

        assert [s.id for s in found] == ["sub_2_bbb", "sub_1_aaa"]


class TestFileStorageBackend:
    """Test file backend"""

    @pytest.mark.asyncio
    async def test_save_writes_json_file(self, temp_dir):
        storage = FileStorageBackend(temp_dir / "submissions")

        await storage.save(make_submission())

        path = temp_dir / "submissions" / "sub_1_aaa.json"
        assert path.exists()
        assert '"submittedAt"' in path.read_text(encoding="utf-8")
        assert (await storage.get("sub_1_aaa")).email == "ann@b.com"

    @pytest.mark.asyncio
    async def test_get_missing(self, temp_dir):
        storage = FileStorageBackend(temp_dir)
        assert await storage.get("sub_nope") is None

    @pytest.mark.asyncio
    async def test_find_by_email_skips_invalid_files(self, temp_dir):
        storage = FileStorageBackend(temp_dir)
        await storage.save(make_submission())
        (temp_dir / "broken.json").write_text("{", encoding="utf-8")

        found = await storage.find_by_email("ann@b.com")

        assert [s.id for s in found] == ["sub_1_aaa"]

    @pytest.mark.asyncio
    async def test_write_failure_is_persistence_error(self, temp_dir):
        storage = FileStorageBackend(temp_dir)
        (temp_dir / "sub_1_aaa.json").mkdir()

        with pytest.raises(PersistenceError):
            await storage.save(make_submission())


class TestDynamoDBStorageBackend:
    """Test DynamoDB backend against a mocked Table resource"""

    @pytest.mark.asyncio
    async def test_save_puts_item(self):
        table = Mock()
        storage = DynamoDBStorageBackend(table)

        await storage.save(make_submission())

        table.put_item.assert_called_once()
        item = table.put_item.call_args.kwargs["Item"]
        assert item["id"] == "sub_1_aaa"
        assert item["email"] == "ann@b.com"
        assert item["status"] == "new"
        assert item["phone"] is None

    @pytest.mark.asyncio
    async def test_save_client_error(self):
        table = Mock()
        table.put_item.side_effect = client_error("PutItem")
        storage = DynamoDBStorageBackend(table)

        with pytest.raises(PersistenceError) as exc_info:
            await storage.save(make_submission())

        assert isinstance(exc_info.value.__cause__, ClientError)

    @pytest.mark.asyncio
    async def test_get(self):
        table = Mock()
        table.get_item.return_value = {"Item": make_submission().to_item()}
        storage = DynamoDBStorageBackend(table)

        submission = await storage.get("sub_1_aaa")

        table.get_item.assert_called_once_with(Key={"id": "sub_1_aaa"})
        assert submission.id == "sub_1_aaa"

    @pytest.mark.asyncio
    async def test_get_missing(self):
        table = Mock()
        table.get_item.return_value = {}
        storage = DynamoDBStorageBackend(table)

        assert await storage.get("sub_1_aaa") is None

    @pytest.mark.asyncio
    async def test_find_by_email_queries_index(self):
        table = Mock()
        table.query.return_value = {
            "Items": [
                make_submission("sub_1_aaa", submitted_at="2026-10-18T10:00:00.000Z").to_item(),
                make_submission("sub_2_bbb", submitted_at="2026-10-18T11:00:00.000Z").to_item(),
            ]
        }
        storage = DynamoDBStorageBackend(table, email_index="by-email")

        found = await storage.find_by_email("Ann@B.com")

        kwargs = table.query.call_args.kwargs
        assert kwargs["IndexName"] == "by-email"
        assert kwargs["KeyConditionExpression"].get_expression()["values"][1] == "ann@b.com"
        assert [s.id for s in found] == ["sub_2_bbb", "sub_1_aaa"]

    @pytest.mark.asyncio
    async def test_find_by_email_follows_pages(self):
        table = Mock()
        table.query.side_effect = [
            {
                "Items": [make_submission("sub_1_aaa", submitted_at="2026-10-18T10:00:00.000Z").to_item()],
                "LastEvaluatedKey": {"id": "sub_1_aaa", "email": "ann@b.com"},
            },
            {
                "Items": [make_submission("sub_2_bbb", submitted_at="2026-10-18T11:00:00.000Z").to_item()],
            },
        ]
        storage = DynamoDBStorageBackend(table)

        found = await storage.find_by_email("ann@b.com")

        assert [s.id for s in found] == ["sub_2_bbb", "sub_1_aaa"]
        assert table.query.call_count == 2
        first, second = table.query.call_args_list
        assert "ExclusiveStartKey" not in first.kwargs
        assert second.kwargs["ExclusiveStartKey"] == {"id": "sub_1_aaa", "email": "ann@b.com"}
