"""Tests for LockRepository."""

import asyncio

from pymongo.errors import DuplicateKeyError

from teamhub.repositories.locks import LockRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db


def _repo(collection):
    return LockRepository(create_mock_db({"locks": collection}))


class TestAcquireLock:
    def test_acquired_when_upsert_returns_document(self):
        collection = create_mock_collection(find_one_and_update={"_id": "team-roster", "holder": "h1"})
        assert asyncio.run(_repo(collection).acquire_lock("team-roster", "h1")) is True

        query = collection.find_one_and_update.call_args.args[0]
        assert query["_id"] == "team-roster"
        assert collection.find_one_and_update.call_args.kwargs["upsert"] is True

    def test_held_lock_reports_false(self):
        collection = create_mock_collection()
        collection.find_one_and_update.side_effect = DuplicateKeyError("dup")
        assert asyncio.run(_repo(collection).acquire_lock("team-roster", "h2")) is False


class TestReleaseLock:
    def test_release_scoped_to_holder(self):
        collection = create_mock_collection(deleted_count=1)
        assert asyncio.run(_repo(collection).release_lock("team-roster", "h1")) is True
        collection.delete_one.assert_called_once_with({"_id": "team-roster", "holder": "h1"})

    def test_release_by_other_holder_is_noop(self):
        collection = create_mock_collection(deleted_count=0)
        assert asyncio.run(_repo(collection).release_lock("team-roster", "h2")) is False
