"""Tests for milestones and events."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from teamhub.core.exceptions import MembershipRequiredError, NotFoundError, PermissionDeniedError
from teamhub.models.calendar import Milestone
from teamhub.services.calendar import CalendarService, month_prefix
from tests.mocks.mongodb import create_mock_db
from tests.mocks.teamhub import make_identity


def _service(caller):
    service = CalendarService(create_mock_db())
    service.identity = make_identity(caller)
    service.milestones = MagicMock()
    service.milestones.list_all = AsyncMock(return_value=[])
    service.milestones.create = AsyncMock()
    service.milestones.find_one_and_update = AsyncMock(return_value=None)
    service.events = MagicMock()
    service.events.list_by_prefix = AsyncMock(return_value=[])
    service.events.create = AsyncMock()
    return service


class TestMonthPrefix:
    def test_both_parts(self):
        assert month_prefix(2024, 3) == "2024-03"

    def test_missing_part_means_no_filter(self):
        assert month_prefix(2024, None) is None
        assert month_prefix(None, 3) is None


class TestEvents:
    def test_list_filters_by_month(self, viewer_member):
        service = _service(viewer_member)
        asyncio.run(service.list_events("principal-vic", 2024, 11))
        service.events.list_by_prefix.assert_called_once_with("2024-11")

    def test_viewer_cannot_create(self, viewer_member):
        with pytest.raises(PermissionDeniedError):
            asyncio.run(
                _service(viewer_member).create_event(
                    "principal-vic", {"title": "Demo", "date": "2024-11-02", "time": "10:00", "type": "presentation"}
                )
            )

    def test_member_creates_event(self, regular_member):
        service = _service(regular_member)
        event = asyncio.run(
            service.create_event(
                "principal-bob", {"title": "Demo", "date": "2024-11-02", "time": "10:00", "type": "presentation"}
            )
        )
        assert event.attendees == 0
        service.events.create.assert_called_once_with(event)

    def test_non_member_rejected(self):
        with pytest.raises(MembershipRequiredError):
            asyncio.run(_service(None).list_events("principal-x"))


class TestMilestones:
    def test_create_defaults(self, regular_member):
        milestone = asyncio.run(
            _service(regular_member).create_milestone("principal-bob", {"title": "Beta", "due_date": "2024-08-01"})
        )
        assert milestone.status == "upcoming"
        assert milestone.progress == 0

    def test_progress_update(self, regular_member):
        service = _service(regular_member)
        service.milestones.find_one_and_update = AsyncMock(
            return_value=Milestone(id="ms-1", title="Beta", due_date="2024-08-01", progress=60, status="in-progress")
        )

        updated = asyncio.run(service.update_milestone_progress("principal-bob", "ms-1", 60, "in-progress"))

        service.milestones.find_one_and_update.assert_called_once_with(
            {"_id": "ms-1"}, {"$set": {"progress": 60, "status": "in-progress"}}
        )
        assert updated.progress == 60

    def test_progress_update_missing(self, regular_member):
        with pytest.raises(NotFoundError):
            asyncio.run(_service(regular_member).update_milestone_progress("principal-bob", "nope", 10))
