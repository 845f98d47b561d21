"""Test submission models"""
import pytest

from travel_inquiry.api.errors import ValidationError
from travel_inquiry.api.models import (
    EMAIL_PATTERN,
    Submission,
    SubmissionRequest,
    SubmissionResponse,
)


class TestSubmissionRequest:
    """Test payload validation"""

    def test_accepts_camel_case_keys(self):
        request = SubmissionRequest.from_payload(
            {
                "name": "A",
                "email": "a@b.com",
                "message": "x",
                "travelDateStart": "2026-12-01",
                "travelDateEnd": "2026-12-10",
            }
        )
        assert request.travel_date_start == "2026-12-01"
        assert request.travel_date_end == "2026-12-10"

    def test_ignores_unknown_keys(self):
        request = SubmissionRequest.from_payload(
            {"name": "A", "email": "a@b.com", "message": "x", "budget": "high"}
        )
        assert not hasattr(request, "budget")

    def test_boolean_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            SubmissionRequest.from_payload(
                {"name": "A", "email": "a@b.com", "message": "x", "phone": True}
            )
        assert exc_info.value.status_code == 400

    def test_non_mapping_rejected(self):
        with pytest.raises(ValidationError):
            SubmissionRequest.from_payload("name=A")

    @pytest.mark.parametrize("email", ["a@b.co", "first.last+tag@sub.example.org", "x@y.z"])
    def test_liberal_email_pattern(self, email):
        assert EMAIL_PATTERN.match(email)


class TestSubmission:
    """Test record construction"""

    def test_build_normalizes_fields(self):
        request = SubmissionRequest.from_payload(
            {"name": "  Ann  ", "email": " ANN@B.COM ", "message": "x"}
        )
        submission = Submission.build(request, "sub_1_abc", "2026-10-18T15:04:05.678Z")

        assert submission.name == "Ann"
        assert submission.email == "ann@b.com"
        assert submission.status == "new"

    def test_to_item_uses_storage_names(self):
        submission = Submission(
            id="sub_1_abc",
            name="Ann",
            email="ann@b.com",
            message="x",
            submitted_at="2026-10-18T15:04:05.678Z",
        )
        item = submission.to_item()

        assert item["submittedAt"] == "2026-10-18T15:04:05.678Z"
        assert item["travelDateStart"] is None
        assert "submitted_at" not in item

    def test_round_trips_storage_item(self):
        item = {
            "id": "sub_1_abc",
            "name": "Ann",
            "email": "ann@b.com",
            "phone": None,
            "destination": "Oslo",
            "travelDateStart": None,
            "travelDateEnd": None,
            "travelers": "3",
            "message": "x",
            "submittedAt": "2026-10-18T15:04:05.678Z",
            "status": "new",
        }
        assert Submission.model_validate(item).to_item() == item


class TestSubmissionResponse:
    """Test response body shape"""

    def test_success_body(self):
        body = SubmissionResponse(
            success=True, message="ok", submission_id="sub_1_abc", timestamp="t"
        ).to_body()
        assert body == {"success": True, "message": "ok", "submissionId": "sub_1_abc", "timestamp": "t"}

    def test_failure_body_omits_empty_fields(self):
        body = SubmissionResponse(success=False, message="bad").to_body()
        assert body == {"success": False, "message": "bad"}
