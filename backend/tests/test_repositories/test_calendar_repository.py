"""Tests for EventRepository month filtering."""

import asyncio

from teamhub.repositories.calendar import EventRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db


class TestListByPrefix:
    def test_prefix_becomes_anchored_regex(self):
        collection = create_mock_collection(find=[])
        repo = EventRepository(create_mock_db({"events": collection}))

        asyncio.run(repo.list_by_prefix("2024-03"))

        collection.find.assert_called_once_with({"date": {"$regex": "^2024\\-03"}})

    def test_no_prefix_lists_everything(self):
        collection = create_mock_collection(find=[])
        repo = EventRepository(create_mock_db({"events": collection}))

        asyncio.run(repo.list_by_prefix(None))

        collection.find.assert_called_once_with({})
        collection.find.return_value.sort.assert_called_once_with([("date", 1), ("time", 1)])
