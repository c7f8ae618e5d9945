import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from teamhub.core.exceptions import NotFoundError, PermissionDeniedError
from teamhub.core.permissions import can_write_shared_content
from teamhub.models.calendar import Event, Milestone
from teamhub.models.member import TeamMember
from teamhub.repositories.calendar import EventRepository, MilestoneRepository
from teamhub.services.identity import IdentityService

logger = logging.getLogger(__name__)


def month_prefix(year: Optional[int], month: Optional[int]) -> Optional[str]:
    """``YYYY-MM`` when both parts are given, else None (no filter)."""
    if not year or not month:
        return None
    return f"{year:04d}-{month:02d}"


class CalendarService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.milestones = MilestoneRepository(db)
        self.events = EventRepository(db)
        self.identity = IdentityService(db)

    async def _require_writer(self, principal_id: Optional[str]) -> TeamMember:
        member = await self.identity.require_member(principal_id)
        if not can_write_shared_content(member):
            logger.warning(f"Viewer {member.id} attempted a calendar write")
            raise PermissionDeniedError("Read-only access. Ask an admin to grant edit access.")
        return member

    async def list_milestones(self, principal_id: Optional[str]) -> List[Milestone]:
        await self.identity.require_member(principal_id)
        return await self.milestones.list_all()

    async def create_milestone(self, principal_id: Optional[str], fields: Dict[str, Any]) -> Milestone:
        member = await self._require_writer(principal_id)
        milestone = Milestone(**fields)
        await self.milestones.create(milestone)
        logger.info(f"Member {member.id} created milestone {milestone.id}")
        return milestone

    async def update_milestone_progress(
        self,
        principal_id: Optional[str],
        milestone_id: str,
        progress: int,
        status: Optional[str] = None,
    ) -> Milestone:
        member = await self._require_writer(principal_id)
        changes: Dict[str, Any] = {"progress": progress}
        if status:
            changes["status"] = status

        updated = await self.milestones.find_one_and_update({"_id": milestone_id}, {"$set": changes})
        if updated is None:
            raise NotFoundError("Milestone")
        logger.info(f"Member {member.id} set milestone {milestone_id} progress to {progress}")
        return updated

    async def list_events(
        self,
        principal_id: Optional[str],
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> List[Event]:
        await self.identity.require_member(principal_id)
        return await self.events.list_by_prefix(month_prefix(year, month))

    async def create_event(self, principal_id: Optional[str], fields: Dict[str, Any]) -> Event:
        member = await self._require_writer(principal_id)
        event = Event(**fields)
        await self.events.create(event)
        logger.info(f"Member {member.id} created event {event.id}")
        return event
