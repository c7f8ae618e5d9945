"""
Identity Resolution

Maps an authenticated principal id to its roster entry. The direct
``user_id`` link always wins; email is only consulted when no member
carries the link, which covers entries created before linking existed
and entries an admin created by email.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from teamhub.core.exceptions import AuthenticationRequiredError, MembershipRequiredError
from teamhub.models.member import TeamMember
from teamhub.models.user import User
from teamhub.repositories.members import MemberRepository
from teamhub.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.members = MemberRepository(db)
        self.users = UserRepository(db)

    async def get_principal(self, principal_id: Optional[str]) -> Optional[User]:
        if not principal_id:
            return None
        return await self.users.get_by_id(principal_id)

    async def resolve_member(self, principal_id: Optional[str]) -> Optional[TeamMember]:
        """Return the caller's member record, or None. Never raises for a missing member."""
        if not principal_id:
            return None

        member = await self.members.get_by_user_id(principal_id)
        if member:
            return member

        user = await self.users.get_by_id(principal_id)
        if user is None or not user.email:
            return None
        return await self.members.get_by_email(user.email)

    async def require_member(self, principal_id: Optional[str]) -> TeamMember:
        if not principal_id:
            raise AuthenticationRequiredError()
        member = await self.resolve_member(principal_id)
        if member is None:
            logger.warning(f"Principal {principal_id} is not on the team roster")
            raise MembershipRequiredError()
        return member
