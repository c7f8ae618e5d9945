import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from teamhub.core.clock import utc_now
from teamhub.core.config import settings
from teamhub.core.constants import UNKNOWN_MEMBER_NAME
from teamhub.models.activity import ActivityLogEntry
from teamhub.repositories.activity import ActivityRepository
from teamhub.repositories.members import MemberRepository

logger = logging.getLogger(__name__)


class ActivityService:
    """Append-only audit trail of team-visible changes."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.entries = ActivityRepository(db)
        self.members = MemberRepository(db)

    async def log(self, actor_id: str, action: str, target: str) -> ActivityLogEntry:
        entry = ActivityLogEntry(user_id=actor_id, action=action, target=target, created_at=utc_now())
        await self.entries.create(entry)
        logger.debug(f"Activity: {actor_id} {action} {target}")
        return entry

    async def recent(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Newest entries first, each with the actor's display name."""
        entries = await self.entries.recent(limit or settings.ACTIVITY_DEFAULT_LIMIT)
        actors = {m.id: m for m in await self.members.get_many([e.user_id for e in entries])}

        result = []
        for entry in entries:
            actor = actors.get(entry.user_id)
            result.append(
                {
                    **entry.model_dump(),
                    "user_name": actor.name if actor else UNKNOWN_MEMBER_NAME,
                }
            )
        return result
