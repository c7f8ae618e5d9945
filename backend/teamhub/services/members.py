"""
Team Roster Service

Roster reads, self-registration and admin management of members.

Demoting or removing an admin is done while holding the roster lock so
the "is anyone else still admin" check and the write that depends on it
cannot interleave with a second demotion. Self-registration takes the
same lock so two joins by one principal cannot both insert a row, and
only one of two simultaneous first joins becomes admin.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from teamhub.core.config import settings
from teamhub.core.constants import (
    ACCESS_LEVEL_ADMIN,
    ACCESS_LEVEL_MEMBER,
    DEFAULT_MEMBER_DEPARTMENT,
    DEFAULT_MEMBER_NAME,
    DEFAULT_MEMBER_ROLE,
    ROSTER_LOCK_NAME,
)
from teamhub.core.exceptions import (
    AuthenticationRequiredError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from teamhub.core.permissions import count_other_admins, is_admin, require_admin
from teamhub.core.updates import diff_against, is_noop, strip_unset
from teamhub.models.member import TeamMember
from teamhub.repositories.locks import LockRepository
from teamhub.repositories.members import MemberRepository
from teamhub.services.identity import IdentityService

logger = logging.getLogger(__name__)

LAST_ADMIN_DETAIL = "Cannot remove the last admin."

# Fields a member may change on their own record
SELF_EDITABLE_FIELDS = frozenset({"role", "department", "skills"})

ROSTER_LOCK_ATTEMPTS = 20
ROSTER_LOCK_WAIT_SECONDS = 0.05


class MemberService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.members = MemberRepository(db)
        self.locks = LockRepository(db)
        self.identity = IdentityService(db)

    @asynccontextmanager
    async def roster_lock(self):
        holder_id = str(uuid.uuid4())
        for _ in range(ROSTER_LOCK_ATTEMPTS):
            if await self.locks.acquire_lock(ROSTER_LOCK_NAME, holder_id, settings.ROSTER_LOCK_TTL_SECONDS):
                break
            await asyncio.sleep(ROSTER_LOCK_WAIT_SECONDS)
        else:
            raise ConflictError("The team roster is being changed. Try again.")
        try:
            yield
        finally:
            await self.locks.release_lock(ROSTER_LOCK_NAME, holder_id)

    async def _ensure_admin_remains(self, target: TeamMember) -> None:
        """Reject when ``target`` is the only admin left. Call with the roster lock held."""
        if not is_admin(target):
            return
        admins = await self.members.list_admins()
        if count_other_admins(admins, target.id) == 0:
            logger.warning(f"Refused to drop last admin {target.id}")
            raise PermissionDeniedError(LAST_ADMIN_DETAIL)

    # -- reads ---------------------------------------------------------------

    async def get_current_member(self, principal_id: Optional[str]) -> Optional[TeamMember]:
        return await self.identity.resolve_member(principal_id)

    async def list(self, principal_id: Optional[str]) -> List[TeamMember]:
        if await self.identity.resolve_member(principal_id) is None:
            return []
        return await self.members.list_all()

    async def get_by_id(self, principal_id: Optional[str], member_id: str) -> Optional[TeamMember]:
        if await self.identity.resolve_member(principal_id) is None:
            return None
        return await self.members.get_by_id(member_id)

    async def get_by_email(self, principal_id: Optional[str], email: str) -> Optional[TeamMember]:
        if await self.identity.resolve_member(principal_id) is None:
            return None
        return await self.members.get_by_email(email)

    # -- writes --------------------------------------------------------------

    async def add_self_as_first_member_or_join(
        self,
        principal_id: Optional[str],
        role: Optional[str] = None,
        department: Optional[str] = None,
    ) -> str:
        """
        Register the caller on the roster.

        Returns the existing member id when the caller is already on the
        roster. The very first member becomes admin; later ones are members.
        """
        if not principal_id:
            raise AuthenticationRequiredError()

        existing = await self.identity.resolve_member(principal_id)
        if existing:
            return existing.id

        user = await self.identity.get_principal(principal_id)
        if user is None:
            raise AuthenticationRequiredError("Unknown principal")

        async with self.roster_lock():
            existing = await self.identity.resolve_member(principal_id)
            if existing:
                return existing.id

            is_first = await self.members.count() == 0
            member = TeamMember(
                name=user.name or DEFAULT_MEMBER_NAME,
                email=user.email or "",
                role=role or DEFAULT_MEMBER_ROLE,
                avatar=user.image or "",
                department=department or DEFAULT_MEMBER_DEPARTMENT,
                access_level=ACCESS_LEVEL_ADMIN if is_first else ACCESS_LEVEL_MEMBER,
                user_id=principal_id,
            )
            try:
                await self.members.create(member)
            except DuplicateKeyError:
                # An invite redemption for the same principal landed first
                raise ConflictError("Already a team member")
        logger.info(f"Principal {principal_id} registered as member {member.id} ({member.access_level})")
        return member.id

    async def create(self, principal_id: Optional[str], fields: Dict[str, Any]) -> TeamMember:
        caller = await self.identity.require_member(principal_id)
        require_admin(caller, "Only admins can add team members")

        fields = strip_unset(fields)
        if await self.members.get_by_email(fields["email"]):
            raise ConflictError("A team member with this email already exists")

        fields.setdefault("access_level", ACCESS_LEVEL_MEMBER)
        member = TeamMember(**fields)
        await self.members.create(member)
        logger.info(f"Admin {caller.id} added member {member.id}")
        return member

    async def update(self, principal_id: Optional[str], member_id: str, patch: Any) -> TeamMember:
        caller = await self.identity.require_member(principal_id)
        target = await self.members.get_by_id(member_id)
        if target is None:
            raise NotFoundError("Member")

        if not is_admin(caller) and caller.id != target.id:
            logger.warning(f"Member {caller.id} tried to edit member {target.id}")
            raise PermissionDeniedError("You can only edit your own profile")

        changes = diff_against(strip_unset(patch), target)
        if is_noop(changes):
            return target

        if not is_admin(caller):
            forbidden = set(changes) - SELF_EDITABLE_FIELDS
            if forbidden:
                logger.warning(f"Member {caller.id} tried to change {sorted(forbidden)}")
                raise PermissionDeniedError("Only admins can change " + ", ".join(sorted(forbidden)))

        demoting = "access_level" in changes and changes["access_level"] != ACCESS_LEVEL_ADMIN
        if demoting and is_admin(target):
            async with self.roster_lock():
                current = await self.members.get_by_id(member_id)
                if current is None:
                    raise NotFoundError("Member")
                await self._ensure_admin_remains(current)
                updated = await self.members.update(member_id, changes)
        else:
            updated = await self.members.update(member_id, changes)

        logger.info(f"Member {caller.id} updated member {member_id}: {sorted(changes)}")
        return updated

    async def update_status(self, principal_id: Optional[str], member_id: str, status: str) -> TeamMember:
        caller = await self.identity.require_member(principal_id)
        if caller.id != member_id and not is_admin(caller):
            raise PermissionDeniedError("You can only change your own status")

        target = await self.members.get_by_id(member_id)
        if target is None:
            raise NotFoundError("Member")
        if target.status == status:
            return target
        return await self.members.update(member_id, {"status": status})

    async def remove(self, principal_id: Optional[str], member_id: str) -> None:
        caller = await self.identity.require_member(principal_id)
        require_admin(caller, "Only admins can remove team members")
        if caller.id == member_id:
            raise PermissionDeniedError("Cannot remove yourself")

        async with self.roster_lock():
            target = await self.members.get_by_id(member_id)
            if target is None:
                raise NotFoundError("Member")
            await self._ensure_admin_remains(target)
            await self.members.delete(member_id)

        logger.info(f"Admin {caller.id} removed member {member_id}")
