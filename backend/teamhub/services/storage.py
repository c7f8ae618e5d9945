"""
Blob Storage

Document bytes live in a GridFS bucket. A storage id is the string form
of the GridFS file ObjectId. Clients never talk to GridFS directly:
uploads and downloads go through short-lived signed URLs served by the
``storage`` endpoints.
"""

import logging
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from gridfs.errors import NoFile
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorGridFSBucket, AsyncIOMotorGridOut
from pymongo.errors import PyMongoError

from teamhub.core.config import settings
from teamhub.core.exceptions import NotFoundError, StorageError
from teamhub.core.metrics import storage_operations_total
from teamhub.core.security import create_download_token, create_upload_token

logger = logging.getLogger(__name__)


def _parse_storage_id(storage_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(storage_id)
    except (InvalidId, TypeError):
        return None


class BlobStorage:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.bucket = AsyncIOMotorGridFSBucket(db, bucket_name=settings.STORAGE_BUCKET_NAME)
        self.files = db[f"{settings.STORAGE_BUCKET_NAME}.files"]

    def generate_upload_url(self, member_id: str) -> str:
        token = create_upload_token(member_id)
        return f"{settings.PUBLIC_BASE_URL}{settings.API_V1_STR}/storage/upload/{token}"

    def get_url(self, storage_id: str) -> str:
        """Signed, time-limited download URL for a blob."""
        token = create_download_token(storage_id)
        return f"{settings.PUBLIC_BASE_URL}{settings.API_V1_STR}/storage/download/{token}"

    async def store(self, file_name: str, content: bytes, content_type: str, uploaded_by: str) -> str:
        try:
            file_id = await self.bucket.upload_from_stream(
                file_name,
                content,
                metadata={"content_type": content_type, "uploaded_by": uploaded_by},
            )
        except PyMongoError as e:
            storage_operations_total.labels(operation="store", status="error").inc()
            logger.error(f"Failed to store blob {file_name}: {e}")
            raise StorageError("Failed to store file", operation="store")

        storage_operations_total.labels(operation="store", status="ok").inc()
        logger.info(f"Stored blob {file_id} ({len(content)} bytes) for member {uploaded_by}")
        return str(file_id)

    async def exists(self, storage_id: str) -> bool:
        object_id = _parse_storage_id(storage_id)
        if object_id is None:
            return False
        try:
            found = await self.files.find_one({"_id": object_id}, {"_id": 1})
        except PyMongoError as e:
            storage_operations_total.labels(operation="exists", status="error").inc()
            logger.error(f"Failed to look up blob {storage_id}: {e}")
            raise StorageError("Failed to check file", operation="exists")
        return found is not None

    async def delete(self, storage_id: str) -> None:
        """Remove a blob. A blob that is already gone counts as deleted."""
        object_id = _parse_storage_id(storage_id)
        if object_id is None:
            logger.warning(f"Skipping delete of malformed storage id {storage_id!r}")
            return
        try:
            await self.bucket.delete(object_id)
        except NoFile:
            logger.warning(f"Blob {storage_id} was already deleted")
        except PyMongoError as e:
            storage_operations_total.labels(operation="delete", status="error").inc()
            logger.error(f"Failed to delete blob {storage_id}: {e}")
            raise StorageError("Failed to delete file", operation="delete")
        else:
            storage_operations_total.labels(operation="delete", status="ok").inc()

    async def open_download(self, storage_id: str) -> AsyncIOMotorGridOut:
        object_id = _parse_storage_id(storage_id)
        if object_id is None:
            raise NotFoundError("File")
        try:
            return await self.bucket.open_download_stream(object_id)
        except NoFile:
            raise NotFoundError("File")
        except PyMongoError as e:
            storage_operations_total.labels(operation="download", status="error").inc()
            logger.error(f"Failed to open blob {storage_id}: {e}")
            raise StorageError("Failed to read file", operation="download")
