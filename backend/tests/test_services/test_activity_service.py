"""Tests for the activity log."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from teamhub.services.activity import ActivityService
from tests.mocks.mongodb import create_mock_db
from tests.mocks.teamhub import make_member
from teamhub.models.activity import ActivityLogEntry


def _service(entries=None, members=None):
    service = ActivityService(create_mock_db())
    service.entries = MagicMock()
    service.entries.create = AsyncMock()
    service.entries.recent = AsyncMock(return_value=entries or [])
    service.members = MagicMock()
    service.members.get_many = AsyncMock(return_value=members or [])
    return service


class TestLog:
    def test_appends_entry(self):
        service = _service()
        entry = asyncio.run(service.log("member-1", "created task", "Write docs"))

        service.entries.create.assert_called_once_with(entry)
        assert entry.user_id == "member-1"
        assert entry.created_at.tzinfo is not None


class TestRecent:
    def test_annotates_user_names(self):
        alice = make_member(id="m-alice", name="Alice")
        entries = [
            ActivityLogEntry(user_id="m-alice", action="created task", target="A"),
            ActivityLogEntry(user_id="m-gone", action="deleted task", target="B"),
        ]
        service = _service(entries, [alice])

        result = asyncio.run(service.recent())

        assert [r["user_name"] for r in result] == ["Alice", "Unknown"]
        service.entries.recent.assert_called_once_with(5)

    def test_custom_limit(self):
        service = _service()
        asyncio.run(service.recent(2))
        service.entries.recent.assert_called_once_with(2)
