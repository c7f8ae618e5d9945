"""Tests for GridFS-backed blob storage."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from gridfs.errors import NoFile
from pymongo.errors import PyMongoError

from teamhub.core.exceptions import NotFoundError, StorageError
from teamhub.core.security import verify_download_token, verify_upload_token
from teamhub.services.storage import BlobStorage
from tests.mocks.mongodb import create_mock_collection, create_mock_db

MODULE = "teamhub.services.storage"


def _storage(files=None):
    db = create_mock_db({"blobs.files": files or create_mock_collection()})
    with patch(f"{MODULE}.AsyncIOMotorGridFSBucket") as bucket_cls:
        storage = BlobStorage(db)
    storage.bucket = bucket_cls.return_value
    storage.bucket.delete = AsyncMock()
    storage.bucket.upload_from_stream = AsyncMock(return_value=ObjectId("65f000000000000000000001"))
    storage.bucket.open_download_stream = AsyncMock()
    return storage


class TestUrls:
    def test_upload_url_carries_member_token(self):
        url = _storage().generate_upload_url("member-1")
        assert url.startswith("http://testserver/api/v1/storage/upload/")
        assert verify_upload_token(url.rsplit("/", 1)[-1]) == "member-1"

    def test_download_url_carries_storage_id(self):
        url = _storage().get_url("65f000000000000000000001")
        assert url.startswith("http://testserver/api/v1/storage/download/")
        assert verify_download_token(url.rsplit("/", 1)[-1]) == "65f000000000000000000001"


class TestStore:
    def test_returns_string_id(self):
        storage = _storage()
        storage_id = asyncio.run(storage.store("a.pdf", b"data", "application/pdf", "member-1"))

        assert storage_id == "65f000000000000000000001"
        kwargs = storage.bucket.upload_from_stream.call_args.kwargs
        assert kwargs["metadata"] == {"content_type": "application/pdf", "uploaded_by": "member-1"}

    def test_failure_raises_storage_error(self):
        storage = _storage()
        storage.bucket.upload_from_stream = AsyncMock(side_effect=PyMongoError("down"))
        with pytest.raises(StorageError):
            asyncio.run(storage.store("a.pdf", b"data", "application/pdf", "member-1"))


class TestExists:
    def test_malformed_id_is_missing(self):
        files = create_mock_collection()
        assert asyncio.run(_storage(files).exists("not-an-object-id")) is False
        files.find_one.assert_not_called()

    def test_found(self):
        files = create_mock_collection(find_one={"_id": ObjectId("65f000000000000000000001")})
        assert asyncio.run(_storage(files).exists("65f000000000000000000001")) is True

    def test_not_found(self):
        files = create_mock_collection(find_one=None)
        assert asyncio.run(_storage(files).exists("65f000000000000000000001")) is False


class TestDelete:
    def test_deletes_by_object_id(self):
        storage = _storage()
        asyncio.run(storage.delete("65f000000000000000000001"))
        storage.bucket.delete.assert_called_once_with(ObjectId("65f000000000000000000001"))

    def test_already_gone_is_fine(self):
        storage = _storage()
        storage.bucket.delete = AsyncMock(side_effect=NoFile("gone"))
        asyncio.run(storage.delete("65f000000000000000000001"))

    def test_backend_failure_raises(self):
        storage = _storage()
        storage.bucket.delete = AsyncMock(side_effect=PyMongoError("down"))
        with pytest.raises(StorageError):
            asyncio.run(storage.delete("65f000000000000000000001"))


class TestOpenDownload:
    def test_missing_blob(self):
        storage = _storage()
        storage.bucket.open_download_stream = AsyncMock(side_effect=NoFile("gone"))
        with pytest.raises(NotFoundError):
            asyncio.run(storage.open_download("65f000000000000000000001"))

    def test_malformed_id(self):
        with pytest.raises(NotFoundError):
            asyncio.run(_storage().open_download("nope"))

    def test_returns_grid_out(self):
        storage = _storage()
        grid_out = MagicMock()
        storage.bucket.open_download_stream = AsyncMock(return_value=grid_out)
        assert asyncio.run(storage.open_download("65f000000000000000000001")) is grid_out
