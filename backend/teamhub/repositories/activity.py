"""
Activity Log Repository

Append-only. Nothing in steady-state operation updates or deletes rows.
"""

from typing import List

from teamhub.models.activity import ActivityLogEntry
from teamhub.repositories.base import BaseRepository


class ActivityRepository(BaseRepository[ActivityLogEntry]):
    collection_name = "activity_log"
    model_class = ActivityLogEntry

    async def recent(self, limit: int) -> List[ActivityLogEntry]:
        return await self.find_many({}, sort="created_at", sort_order=-1, limit=limit)
