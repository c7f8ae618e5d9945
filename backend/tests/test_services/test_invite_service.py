"""Tests for the invite lifecycle: create, validate, redeem, list, revoke and extend."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import DuplicateKeyError, PyMongoError

from teamhub.core import ensure_utc
from teamhub.core.constants import INVITE_CODE_ALPHABET
from teamhub.core.exceptions import ConflictError, InvalidInputError, NotFoundError, PermissionDeniedError
from teamhub.services.invites import InviteService, generate_invite_code, normalize_code
from tests.mocks.mongodb import create_mock_db
from tests.mocks.teamhub import FIXED_NOW, make_activity, make_identity, make_invite, make_member, make_user

MODULE = "teamhub.services.invites"


class FakeInviteStore:
    """In-memory InviteRepository applying the same conditional writes."""

    def __init__(self, *invites):
        self.rows = {i.id: i for i in invites}

    async def code_exists(self, code):
        return any(i.code == code for i in self.rows.values())

    async def create(self, invite):
        self.rows[invite.id] = invite
        return invite

    async def get_by_id(self, invite_id):
        return self.rows.get(invite_id)

    async def get_by_code(self, code):
        return next((i for i in self.rows.values() if i.code == code), None)

    async def list_newest_first(self):
        return sorted(self.rows.values(), key=lambda i: i.created_at, reverse=True)

    async def claim(self, invite_id, member_id, now):
        await asyncio.sleep(0)
        invite = self.rows.get(invite_id)
        if invite is None or invite.used_by is not None or ensure_utc(invite.expires_at) <= now:
            return None
        self.rows[invite_id] = invite.model_copy(update={"used_by": member_id, "used_at": now})
        return self.rows[invite_id]

    async def release_claim(self, invite_id, member_id):
        invite = self.rows.get(invite_id)
        if invite and invite.used_by == member_id:
            self.rows[invite_id] = invite.model_copy(update={"used_by": None, "used_at": None})

    async def delete_unused(self, invite_id):
        invite = self.rows.get(invite_id)
        if invite is None or invite.used_by is not None:
            return False
        del self.rows[invite_id]
        return True

    async def set_expiry_if_unused(self, invite_id, expires_at):
        invite = self.rows.get(invite_id)
        if invite is None or invite.used_by is not None:
            return None
        self.rows[invite_id] = invite.model_copy(update={"expires_at": expires_at})
        return self.rows[invite_id]


class Clock:
    def __init__(self, now=FIXED_NOW):
        self.now = now

    def __call__(self):
        return self.now


def _service(caller=None, store=None, user=None, members=None):
    service = InviteService(create_mock_db())
    service.identity = make_identity(caller, user=user)
    service.activity = make_activity()
    service.invites = store if store is not None else FakeInviteStore()
    service.members = MagicMock()
    service.members.create = AsyncMock()
    service.members.get_many = AsyncMock(return_value=members or [])
    return service


def _as_principal(service, user):
    """Switch the service to a principal with no roster entry."""
    service.identity = make_identity(None, user=user)


class TestCodes:
    def test_code_length_and_alphabet(self):
        code = generate_invite_code()
        assert len(code) == 8
        assert set(code) <= set(INVITE_CODE_ALPHABET)

    def test_alphabet_excludes_confusable_characters(self):
        assert not set("IO01") & set(INVITE_CODE_ALPHABET)

    def test_normalize(self):
        assert normalize_code("  abcd2345 ") == "ABCD2345"


class TestCreate:
    def test_admin_creates_invite(self, admin_member):
        store = FakeInviteStore()
        service = _service(admin_member, store)

        with patch(f"{MODULE}.utc_now", Clock()):
            result = asyncio.run(service.create("principal-admin", 3))

        assert set(result) == {"id", "code", "expires_at"}
        assert result["expires_at"] == FIXED_NOW + timedelta(days=3)
        assert store.rows[result["id"]].created_by == admin_member.id
        service.activity.log.assert_called_once_with(admin_member.id, "created invite link", result["code"])

    def test_default_expiry_is_seven_days(self, admin_member):
        service = _service(admin_member)
        with patch(f"{MODULE}.utc_now", Clock()):
            result = asyncio.run(service.create("principal-admin"))
        assert result["expires_at"] == FIXED_NOW + timedelta(days=7)

    def test_non_admin_rejected_and_nothing_stored(self, regular_member):
        store = FakeInviteStore()
        service = _service(regular_member, store)

        with pytest.raises(PermissionDeniedError):
            asyncio.run(service.create("principal-bob", 7))

        assert store.rows == {}
        service.activity.log.assert_not_called()

    @pytest.mark.parametrize("days", [0, -1])
    def test_non_positive_days_rejected(self, admin_member, days):
        with pytest.raises(InvalidInputError):
            asyncio.run(_service(admin_member).create("principal-admin", days))

    def test_retries_on_code_collision(self, admin_member):
        store = FakeInviteStore(make_invite(code="TAKEN222"))
        service = _service(admin_member, store)

        with patch(f"{MODULE}.generate_invite_code", side_effect=["TAKEN222", "FRESH333"]):
            result = asyncio.run(service.create("principal-admin", 1))

        assert result["code"] == "FRESH333"


class TestValidate:
    def test_unknown_code(self):
        result = asyncio.run(_service().validate("NOPE2345"))
        assert result == {"valid": False, "reason": "Invalid invite code"}

    def test_valid_code_case_insensitive(self):
        invite = make_invite(code="ABCD2345")
        service = _service(store=FakeInviteStore(invite))

        with patch(f"{MODULE}.utc_now", Clock()):
            result = asyncio.run(service.validate("abcd2345"))

        assert result["valid"] is True
        assert result["invite"].id == invite.id

    def test_used_code(self):
        invite = make_invite(used_by="member-x", used_at=FIXED_NOW)
        service = _service(store=FakeInviteStore(invite))

        with patch(f"{MODULE}.utc_now", Clock()):
            result = asyncio.run(service.validate(invite.code))

        assert result == {"valid": False, "reason": "Invite already used"}


class TestExpiryScenario:
    def test_expired_invite_fails_validate_and_redeem(self, admin_member, principal_user):
        clock = Clock()
        service = _service(admin_member)

        with patch(f"{MODULE}.utc_now", clock):
            created = asyncio.run(service.create("principal-admin", 1))

            clock.now = FIXED_NOW + timedelta(days=1, seconds=1)
            assert asyncio.run(service.validate(created["code"])) == {"valid": False, "reason": "Invite expired"}

            _as_principal(service, principal_user)
            with pytest.raises(InvalidInputError) as exc_info:
                asyncio.run(service.redeem("principal-new", created["code"], "Developer", "engineering"))

        assert exc_info.value.detail == "Invite expired"
        service.members.create.assert_not_called()


class TestRedeem:
    def test_validate_then_redeem_round_trip(self, admin_member, principal_user):
        service = _service(admin_member)

        with patch(f"{MODULE}.utc_now", Clock()):
            created = asyncio.run(service.create("principal-admin", 7))
            assert asyncio.run(service.validate(created["code"]))["valid"] is True

            _as_principal(service, principal_user)
            member_id = asyncio.run(
                service.redeem("principal-new", created["code"], "Designer", "design", ["figma"])
            )

            assert asyncio.run(service.validate(created["code"])) == {
                "valid": False,
                "reason": "Invite already used",
            }

        member = service.members.create.call_args.args[0]
        assert member.id == member_id
        assert member.access_level == "member"
        assert member.user_id == "principal-new"
        assert member.email == principal_user.email
        assert member.skills == ["figma"]

        invite = service.invites.rows[created["id"]]
        assert invite.used_by == member_id
        assert invite.used_at == FIXED_NOW
        service.activity.log.assert_called_with(member_id, "joined the team", created["code"])

    def test_concurrent_redemptions_only_one_wins(self):
        invite = make_invite()
        service = _service(store=FakeInviteStore(invite), user=make_user(id="principal-x"))

        async def redeem_twice():
            return await asyncio.gather(
                service.redeem("principal-1", invite.code, "Dev", "engineering"),
                service.redeem("principal-2", invite.code, "Dev", "engineering"),
                return_exceptions=True,
            )

        with patch(f"{MODULE}.utc_now", Clock()):
            results = asyncio.run(redeem_twice())

        winners = [r for r in results if isinstance(r, str)]
        losers = [r for r in results if isinstance(r, InvalidInputError)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert losers[0].detail == "Invite already used"
        assert service.members.create.call_count == 1

    def test_existing_member_rejected(self, regular_member):
        service = _service(regular_member, FakeInviteStore(make_invite()))
        with pytest.raises(ConflictError):
            asyncio.run(service.redeem("principal-bob", "ABCD2345", "Dev", "engineering"))

    def test_member_insert_failure_releases_claim(self, principal_user):
        invite = make_invite()
        service = _service(store=FakeInviteStore(invite), user=principal_user)
        service.members.create = AsyncMock(side_effect=PyMongoError("write failed"))

        with patch(f"{MODULE}.utc_now", Clock()):
            with pytest.raises(PyMongoError):
                asyncio.run(service.redeem("principal-new", invite.code, "Dev", "engineering"))

        assert service.invites.rows[invite.id].used_by is None
        service.activity.log.assert_not_called()

    def test_principal_already_on_roster_releases_claim(self, principal_user):
        invite = make_invite()
        service = _service(store=FakeInviteStore(invite), user=principal_user)
        service.members.create = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))

        with patch(f"{MODULE}.utc_now", Clock()):
            with pytest.raises(ConflictError) as exc_info:
                asyncio.run(service.redeem("principal-new", invite.code, "Dev", "engineering"))

        assert exc_info.value.detail == "Already a team member"
        assert service.invites.rows[invite.id].used_by is None
        service.activity.log.assert_not_called()


class TestList:
    def test_non_admin_gets_empty_list(self, regular_member):
        service = _service(regular_member, FakeInviteStore(make_invite()))
        assert asyncio.run(service.list("principal-bob")) == []

    def test_non_member_gets_empty_list(self):
        service = _service(None, FakeInviteStore(make_invite()))
        assert asyncio.run(service.list("principal-x")) == []

    def test_admin_sees_annotated_invites(self, admin_member, regular_member):
        active = make_invite(id="i-active", code="ACTV2345", created_at=FIXED_NOW)
        expired = make_invite(
            id="i-expired",
            code="EXPD2345",
            created_at=FIXED_NOW - timedelta(days=10),
            expires_in=timedelta(days=1),
        )
        used = make_invite(
            id="i-used",
            code="USED2345",
            created_at=FIXED_NOW - timedelta(days=1),
            used_by=regular_member.id,
            used_at=FIXED_NOW,
        )
        service = _service(
            admin_member,
            FakeInviteStore(active, expired, used),
            members=[admin_member, regular_member],
        )

        with patch(f"{MODULE}.utc_now", Clock()):
            items = asyncio.run(service.list("principal-admin"))

        assert [i["id"] for i in items] == ["i-active", "i-used", "i-expired"]
        by_id = {i["id"]: i for i in items}
        assert by_id["i-expired"]["is_expired"] is True
        assert by_id["i-active"]["is_expired"] is False
        assert by_id["i-used"]["is_used"] is True
        assert by_id["i-used"]["used_by_name"] == regular_member.name
        assert by_id["i-active"]["creator_name"] == admin_member.name
        assert "used_by_name" not in by_id["i-active"]


class TestRevoke:
    def test_revoke_unused(self, admin_member):
        invite = make_invite()
        store = FakeInviteStore(invite)
        service = _service(admin_member, store)

        asyncio.run(service.revoke("principal-admin", invite.id))

        assert store.rows == {}
        service.activity.log.assert_called_once_with(admin_member.id, "revoked invite link", invite.code)

    def test_used_invite_cannot_be_revoked(self, admin_member):
        invite = make_invite(used_by="member-x", used_at=FIXED_NOW)
        store = FakeInviteStore(invite)

        with pytest.raises(InvalidInputError):
            asyncio.run(_service(admin_member, store).revoke("principal-admin", invite.id))
        assert invite.id in store.rows

    def test_missing_invite(self, admin_member):
        with pytest.raises(NotFoundError):
            asyncio.run(_service(admin_member).revoke("principal-admin", "nope"))

    def test_non_admin_rejected(self, regular_member):
        invite = make_invite()
        with pytest.raises(PermissionDeniedError):
            asyncio.run(_service(regular_member, FakeInviteStore(invite)).revoke("principal-bob", invite.id))


class TestExtend:
    def test_active_invite_extends_from_current_expiry(self, admin_member):
        invite = make_invite(expires_in=timedelta(days=2))
        service = _service(admin_member, FakeInviteStore(invite))

        with patch(f"{MODULE}.utc_now", Clock()):
            updated = asyncio.run(service.extend("principal-admin", invite.id, 3))

        assert updated.expires_at == FIXED_NOW + timedelta(days=5)

    def test_expired_invite_extends_from_now(self, admin_member):
        invite = make_invite(created_at=FIXED_NOW - timedelta(days=10), expires_in=timedelta(days=1))
        service = _service(admin_member, FakeInviteStore(invite))

        with patch(f"{MODULE}.utc_now", Clock()):
            updated = asyncio.run(service.extend("principal-admin", invite.id, 2))

        assert updated.expires_at == FIXED_NOW + timedelta(days=2)

    def test_used_invite_cannot_be_extended(self, admin_member):
        invite = make_invite(used_by="member-x", used_at=FIXED_NOW)
        with pytest.raises(InvalidInputError):
            asyncio.run(_service(admin_member, FakeInviteStore(invite)).extend("principal-admin", invite.id))

    def test_zero_days_rejected(self, admin_member):
        invite = make_invite()
        with pytest.raises(InvalidInputError):
            asyncio.run(_service(admin_member, FakeInviteStore(invite)).extend("principal-admin", invite.id, 0))
