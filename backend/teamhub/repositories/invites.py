"""
Invite Repository

The conditional writes here are what keep an invite single-use: each
one only matches while ``used_by`` is still unset.
"""

from datetime import datetime
from typing import List, Optional

from teamhub.models.invite import Invite
from teamhub.repositories.base import BaseRepository


class InviteRepository(BaseRepository[Invite]):
    collection_name = "invites"
    model_class = Invite

    async def get_by_code(self, code: str) -> Optional[Invite]:
        return await self.find_one({"code": code})

    async def code_exists(self, code: str) -> bool:
        return await self.collection.find_one({"code": code}, {"_id": 1}) is not None

    async def list_newest_first(self) -> List[Invite]:
        return await self.find_many({}, sort="created_at", sort_order=-1)

    async def claim(self, invite_id: str, member_id: str, now: datetime) -> Optional[Invite]:
        """Mark the invite used by ``member_id`` if it is still unused and unexpired."""
        return await self.find_one_and_update(
            {"_id": invite_id, "used_by": None, "expires_at": {"$gt": now}},
            {"$set": {"used_by": member_id, "used_at": now}},
        )

    async def release_claim(self, invite_id: str, member_id: str) -> None:
        """Undo ``claim`` when the member it was reserved for could not be created."""
        await self.collection.update_one(
            {"_id": invite_id, "used_by": member_id},
            {"$set": {"used_by": None, "used_at": None}},
        )

    async def delete_unused(self, invite_id: str) -> bool:
        result = await self.collection.delete_one({"_id": invite_id, "used_by": None})
        return result.deleted_count > 0

    async def set_expiry_if_unused(self, invite_id: str, expires_at: datetime) -> Optional[Invite]:
        return await self.find_one_and_update(
            {"_id": invite_id, "used_by": None},
            {"$set": {"expires_at": expires_at}},
        )
