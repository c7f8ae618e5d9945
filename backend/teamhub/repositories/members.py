"""
Team Member Repository

Roster lookups. A member is found either by its link to an identity
principal (``user_id``) or, for older entries, by email.
"""

from typing import List, Optional

from teamhub.core.constants import ACCESS_LEVEL_ADMIN
from teamhub.models.member import TeamMember
from teamhub.repositories.base import BaseRepository


class MemberRepository(BaseRepository[TeamMember]):
    collection_name = "team_members"
    model_class = TeamMember

    async def get_by_user_id(self, user_id: str) -> Optional[TeamMember]:
        return await self.find_one({"user_id": user_id})

    async def get_by_email(self, email: str) -> Optional[TeamMember]:
        return await self.find_one({"email": email})

    async def list_all(self) -> List[TeamMember]:
        return await self.find_many({}, sort="name")

    async def list_admins(self) -> List[TeamMember]:
        return await self.find_many({"access_level": ACCESS_LEVEL_ADMIN})

    async def get_many(self, member_ids: List[str]) -> List[TeamMember]:
        """Batch lookup used when hydrating references."""
        if not member_ids:
            return []
        return await self.find_many({"_id": {"$in": list(set(member_ids))}})

    async def count_online(self) -> int:
        return await self.count({"status": "online"})
