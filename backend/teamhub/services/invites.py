"""
Invite Lifecycle

Admins issue single-use join codes; a principal without a roster entry
redeems one to become a member.

An invite is Active until it is Used (redeemed) or Revoked (deleted).
Expired is derived at read time from ``expires_at`` and never stored.
Every state change is a single conditional write on the invite
document, so two redemptions of the same code cannot both succeed.
"""

import logging
import secrets
from datetime import timedelta
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from teamhub.core import ensure_utc
from teamhub.core.clock import utc_now
from teamhub.core.config import settings
from teamhub.core.constants import (
    ACCESS_LEVEL_MEMBER,
    ACTIVITY_CREATED_INVITE,
    ACTIVITY_EXTENDED_INVITE,
    ACTIVITY_JOINED_TEAM,
    ACTIVITY_REVOKED_INVITE,
    DEFAULT_MEMBER_NAME,
    INVITE_CODE_ALPHABET,
    INVITE_CODE_MAX_ATTEMPTS,
    INVITE_REASON_EXPIRED,
    INVITE_REASON_NOT_FOUND,
    INVITE_REASON_USED,
    UNKNOWN_MEMBER_NAME,
)
from teamhub.core.exceptions import (
    AuthenticationRequiredError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
)
from teamhub.core.metrics import invites_created_total, invites_redeemed_total
from teamhub.core.permissions import is_admin, require_admin
from teamhub.models.invite import Invite
from teamhub.models.member import TeamMember
from teamhub.repositories.invites import InviteRepository
from teamhub.repositories.members import MemberRepository
from teamhub.services.activity import ActivityService
from teamhub.services.identity import IdentityService

logger = logging.getLogger(__name__)


def generate_invite_code(length: Optional[int] = None) -> str:
    length = length or settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def normalize_code(code: str) -> str:
    return code.strip().upper()


def _mask(code: str) -> str:
    return f"{code[:2]}******"


def _check_days(expires_in_days: Optional[int]) -> int:
    days = settings.INVITE_DEFAULT_EXPIRY_DAYS if expires_in_days is None else expires_in_days
    if days <= 0:
        raise InvalidInputError("Expiry must be at least one day", field="expires_in_days")
    return days


def invite_rejection(invite: Optional[Invite], now=None) -> Optional[str]:
    """Why ``invite`` cannot be redeemed right now, or None if it can."""
    if invite is None:
        return INVITE_REASON_NOT_FOUND
    if invite.is_used:
        return INVITE_REASON_USED
    if invite.is_expired(now):
        return INVITE_REASON_EXPIRED
    return None


class InviteService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.invites = InviteRepository(db)
        self.members = MemberRepository(db)
        self.identity = IdentityService(db)
        self.activity = ActivityService(db)

    async def create(self, principal_id: Optional[str], expires_in_days: Optional[int] = None) -> Dict[str, Any]:
        """Issue a new code. The raw code is only ever returned here."""
        caller = await self.identity.require_member(principal_id)
        require_admin(caller, "Only admins can create invite links")
        days = _check_days(expires_in_days)

        now = utc_now()
        for _ in range(INVITE_CODE_MAX_ATTEMPTS):
            code = generate_invite_code()
            if await self.invites.code_exists(code):
                continue
            invite = Invite(
                code=code,
                created_by=caller.id,
                created_at=now,
                expires_at=now + timedelta(days=days),
            )
            try:
                await self.invites.create(invite)
            except DuplicateKeyError:
                continue
            break
        else:
            raise ConflictError("Could not generate a unique invite code")

        await self.activity.log(caller.id, ACTIVITY_CREATED_INVITE, invite.code)
        invites_created_total.inc()
        logger.info(f"Admin {caller.id} created invite {invite.id} ({_mask(invite.code)}), expires {invite.expires_at}")
        return {"id": invite.id, "code": invite.code, "expires_at": invite.expires_at}

    async def validate(self, code: str) -> Dict[str, Any]:
        """Read-only probe used by the join page. Redemption re-checks everything."""
        invite = await self.invites.get_by_code(normalize_code(code))
        reason = invite_rejection(invite, utc_now())
        if reason:
            return {"valid": False, "reason": reason}
        return {"valid": True, "invite": invite}

    async def redeem(
        self,
        principal_id: Optional[str],
        code: str,
        role: str,
        department: str,
        skills: Optional[List[str]] = None,
    ) -> str:
        """Join the team with ``code``; returns the new member id."""
        if not principal_id:
            raise AuthenticationRequiredError()
        if await self.identity.resolve_member(principal_id):
            raise ConflictError("Already a team member")

        user = await self.identity.get_principal(principal_id)
        if user is None:
            raise AuthenticationRequiredError("Unknown principal")

        invite = await self.invites.get_by_code(normalize_code(code))
        reason = invite_rejection(invite, utc_now())
        if reason:
            raise InvalidInputError(reason, field="code")

        member = TeamMember(
            name=user.name or DEFAULT_MEMBER_NAME,
            email=user.email or "",
            role=role,
            avatar=user.image or "",
            department=department,
            access_level=ACCESS_LEVEL_MEMBER,
            skills=skills,
            user_id=principal_id,
        )

        # The claim is the only check that counts; the one above just gives a nicer message.
        now = utc_now()
        claimed = await self.invites.claim(invite.id, member.id, now)
        if claimed is None:
            current = await self.invites.get_by_id(invite.id)
            raise InvalidInputError(invite_rejection(current, now) or INVITE_REASON_USED, field="code")

        try:
            await self.members.create(member)
        except DuplicateKeyError:
            # The principal joined through another path after the check above
            logger.warning(f"Principal {principal_id} already on the roster; releasing claim on {invite.id}")
            await self.invites.release_claim(invite.id, member.id)
            raise ConflictError("Already a team member")
        except PyMongoError:
            logger.exception(f"Failed to create member for invite {invite.id}; releasing claim")
            await self.invites.release_claim(invite.id, member.id)
            raise

        await self.activity.log(member.id, ACTIVITY_JOINED_TEAM, invite.code)
        invites_redeemed_total.inc()
        logger.info(f"Principal {principal_id} redeemed invite {invite.id} as member {member.id}")
        return member.id

    async def list(self, principal_id: Optional[str]) -> List[Dict[str, Any]]:
        """All invites for admins. Anyone else gets an empty list rather than an error."""
        caller = await self.identity.resolve_member(principal_id)
        if caller is None or not is_admin(caller):
            return []
        return await self._list_annotated()

    async def _list_annotated(self) -> List[Dict[str, Any]]:
        invites = await self.invites.list_newest_first()
        related = [i.created_by for i in invites] + [i.used_by for i in invites if i.used_by]
        names = {m.id: m.name for m in await self.members.get_many(related)}

        now = utc_now()
        result = []
        for invite in invites:
            item = invite.model_dump()
            item["expires_at"] = ensure_utc(invite.expires_at)
            item["is_expired"] = invite.is_expired(now)
            item["is_used"] = invite.is_used
            item["creator_name"] = names.get(invite.created_by, UNKNOWN_MEMBER_NAME)
            if invite.used_by:
                item["used_by_name"] = names.get(invite.used_by, UNKNOWN_MEMBER_NAME)
            result.append(item)
        return result

    async def revoke(self, principal_id: Optional[str], invite_id: str) -> None:
        caller = await self.identity.require_member(principal_id)
        require_admin(caller, "Only admins can revoke invite links")

        invite = await self.invites.get_by_id(invite_id)
        if invite is None:
            raise NotFoundError("Invite")
        if invite.is_used or not await self.invites.delete_unused(invite_id):
            raise InvalidInputError("Only unused invites can be revoked")

        await self.activity.log(caller.id, ACTIVITY_REVOKED_INVITE, invite.code)
        logger.info(f"Admin {caller.id} revoked invite {invite_id}")

    async def extend(
        self,
        principal_id: Optional[str],
        invite_id: str,
        expires_in_days: Optional[int] = None,
    ) -> Invite:
        """Push expiry to max(current expiry, now) + N days."""
        caller = await self.identity.require_member(principal_id)
        require_admin(caller, "Only admins can extend invite links")
        days = _check_days(expires_in_days)

        invite = await self.invites.get_by_id(invite_id)
        if invite is None:
            raise NotFoundError("Invite")
        if invite.is_used:
            raise InvalidInputError("Only unused invites can be extended")

        base = max(ensure_utc(invite.expires_at), utc_now())
        updated = await self.invites.set_expiry_if_unused(invite_id, base + timedelta(days=days))
        if updated is None:
            raise InvalidInputError("Only unused invites can be extended")

        await self.activity.log(caller.id, ACTIVITY_EXTENDED_INVITE, invite.code)
        logger.info(f"Admin {caller.id} extended invite {invite_id} to {updated.expires_at}")
        return updated
