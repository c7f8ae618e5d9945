"""
Lock Repository

Short-lived named locks in the ``locks`` collection. A lock is an
upserted document whose ``expires_at`` lets it lapse if its holder dies.
"""

from datetime import timedelta

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from teamhub.core.clock import utc_now


class LockRepository:
    """Repository for named lock operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["locks"]

    async def acquire_lock(self, lock_name: str, holder_id: str, ttl_seconds: int = 10) -> bool:
        """
        Try to acquire a lock atomically.

        Returns:
            True if acquired, False if another holder has an unexpired lock
        """
        now = utc_now()
        expires_at = now + timedelta(seconds=ttl_seconds)

        try:
            result = await self.collection.find_one_and_update(
                {
                    "_id": lock_name,
                    "$or": [
                        {"expires_at": {"$exists": False}},
                        {"expires_at": {"$lt": now}},
                    ],
                },
                {
                    "$set": {
                        "acquired_at": now,
                        "expires_at": expires_at,
                        "holder": holder_id,
                    }
                },
                upsert=True,
                return_document=True,
            )
        except DuplicateKeyError:
            # The lock exists and is unexpired; the upsert collided with it.
            return False

        return result is not None

    async def release_lock(self, lock_name: str, holder_id: str) -> bool:
        """Release the lock if ``holder_id`` still holds it."""
        result = await self.collection.delete_one({"_id": lock_name, "holder": holder_id})
        return result.deleted_count > 0
