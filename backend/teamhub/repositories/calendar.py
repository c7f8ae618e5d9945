"""
Calendar Repositories (milestones and events)
"""

import re
from typing import List, Optional

from teamhub.models.calendar import Event, Milestone
from teamhub.repositories.base import BaseRepository


class MilestoneRepository(BaseRepository[Milestone]):
    collection_name = "milestones"
    model_class = Milestone

    async def list_all(self) -> List[Milestone]:
        return await self.find_many({}, sort="due_date")


class EventRepository(BaseRepository[Event]):
    collection_name = "events"
    model_class = Event

    async def list_by_prefix(self, date_prefix: Optional[str] = None) -> List[Event]:
        """Events sorted by date, optionally restricted to dates starting with ``date_prefix``."""
        query = {}
        if date_prefix:
            query["date"] = {"$regex": f"^{re.escape(date_prefix)}"}
        return await self.find_many(query, sort=[("date", 1), ("time", 1)])
