"""
Tests for the Ribbon client and response normalization.

Run with: pytest tests/test_ribbon_service.py -v
"""
import json
from datetime import datetime, timezone

import pytest

from codefessor.exceptions import QuotaExceededError, UpstreamUnavailableError
from codefessor.models.ribbon import normalize_interview
from codefessor.services.ribbon_service import RibbonService, split_name
from conftest import FakeRibbon, completed_interview


class TestNormalizeInterview:

    def test_nested_shape(self):
        record = normalize_interview({
            "interview_id": "root-id",
            "status": "completed",
            "interview_flow_id": "flow-root",
            "interview_data": {
                "interview_id": "nested-id",
                "status": "in_progress",
                "interview_flow_id": "flow-nested",
                "transcript": "hello",
                "completed_at": "2024-05-01T10:00:00Z",
            },
        })

        assert record.interview_id == "nested-id"
        assert record.status == "completed"
        assert record.interview_flow_id == "flow-root"
        assert record.transcript == "hello"
        assert record.completed_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_nested_shape_falls_back_to_nested_status(self):
        record = normalize_interview({"interview_data": {"interview_id": "iv-1", "status": "completed"}})
        assert record.status == "completed"

    def test_flat_shape(self):
        record = normalize_interview({
            "interview_id": "iv-1",
            "interview_flow_id": "flow-1",
            "status": "pending",
        })
        assert record.interview_id == "iv-1"
        assert record.status == "pending"
        assert record.transcript is None
        assert not record.is_completed

    def test_entry_without_id_is_dropped(self):
        assert normalize_interview({"status": "completed"}) is None

    def test_structured_transcript_is_stringified(self):
        turns = [{"speaker": "agent", "text": "Hi"}]
        record = normalize_interview({"interview_id": "iv-1", "transcript": turns})
        assert json.loads(record.transcript) == turns

    def test_naive_timestamp_is_utc(self):
        record = normalize_interview({"interview_id": "iv-1", "completed_at": "2024-05-01T10:00:00"})
        assert record.completed_at.tzinfo is not None


class TestSplitName:

    def test_split_on_first_space(self):
        assert split_name("Ada King Lovelace") == ("Ada", "King Lovelace")

    def test_single_name(self):
        assert split_name("Cher") == ("Cher", "")


class TestRibbonService:

    @pytest.mark.asyncio
    async def test_list_interviews(self):
        ribbon = FakeRibbon([
            completed_interview("iv-1"),
            {"interview_id": "iv-2", "status": "in_progress"},
            {"status": "completed"},
        ])
        records = await ribbon.service().list_interviews()

        assert [r.interview_id for r in records] == ["iv-1", "iv-2"]
        request = ribbon.requests[0]
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.url.params["limit"] == "1000"

    @pytest.mark.asyncio
    async def test_get_interview(self):
        ribbon = FakeRibbon([completed_interview("iv-1")])
        service = ribbon.service()

        assert (await service.get_interview("iv-1")).is_completed
        assert await service.get_interview("iv-404") is None

    @pytest.mark.asyncio
    async def test_create_flow_and_interview(self):
        ribbon = FakeRibbon()
        service = ribbon.service()

        flow_id = await service.create_interview_flow(["Q1", "Q2"], title="Code Understanding Assessment - Go")
        interview = await service.create_interview(flow_id, "ada@example.com", "Ada King Lovelace")

        flow_body = json.loads(ribbon.requests[0].content)
        assert flow_body["title"] == "Code Understanding Assessment - Go"
        assert flow_body["questions"] == ["Q1", "Q2"]
        assert flow_body["interview_type"] == "recruitment"
        assert flow_body["is_video_enabled"] is True
        assert flow_body["org_name"]

        interview_body = json.loads(ribbon.requests[1].content)
        assert interview_body == {
            "interview_flow_id": "flow-1",
            "interviewee_email_address": "ada@example.com",
            "interviewee_first_name": "Ada",
            "interviewee_last_name": "King Lovelace",
        }
        assert interview.interview_id == "iv-new"
        assert interview.interview_link == "https://ribbon.test/i/iv-new"

    @pytest.mark.asyncio
    async def test_error_status_raises_upstream_unavailable(self):
        ribbon = FakeRibbon()
        ribbon.list_status = 500

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await ribbon.service().list_interviews()
        assert exc_info.value.status_code == 502
        assert exc_info.value.details["upstreamStatus"] == 500

    @pytest.mark.asyncio
    async def test_rate_limit_raises_quota_exceeded(self):
        ribbon = FakeRibbon()
        ribbon.list_status = 429

        with pytest.raises(QuotaExceededError) as exc_info:
            await ribbon.service().list_interviews()
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        with pytest.raises(UpstreamUnavailableError):
            await RibbonService(api_key=None).list_interviews()
