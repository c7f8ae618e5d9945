"""Tests for roster endpoints."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from teamhub.api.v1.endpoints.members import join_team, list_members, remove_member, update_member
from teamhub.core.exceptions import PermissionDeniedError
from teamhub.schemas.member import JoinRequest, MemberUpdate


def _service(**methods):
    service = MagicMock()
    for name, value in methods.items():
        setattr(service, name, value if isinstance(value, AsyncMock) else AsyncMock(return_value=value))
    return service


class TestListMembers:
    def test_passes_principal_through(self, regular_member):
        service = _service(list=[regular_member])
        result = asyncio.run(list_members(principal_id="principal-bob", service=service))
        assert result == [regular_member]
        service.list.assert_called_once_with("principal-bob")


class TestJoinTeam:
    def test_returns_member_id(self):
        service = _service(add_self_as_first_member_or_join="member-new")
        result = asyncio.run(
            join_team(
                join_in=JoinRequest(role="Designer", department="design"),
                principal_id="principal-new",
                service=service,
            )
        )
        assert result == {"member_id": "member-new"}
        service.add_self_as_first_member_or_join.assert_called_once_with(
            "principal-new", role="Designer", department="design"
        )


class TestUpdateMember:
    def test_forwards_partial_update(self, regular_member):
        service = _service(update=regular_member)
        update_in = MemberUpdate(role="Lead")
        asyncio.run(update_member(member_id="member-bob", member_in=update_in, principal_id="principal-bob", service=service))
        service.update.assert_called_once_with("principal-bob", "member-bob", update_in)


class TestRemoveMember:
    def test_no_content(self):
        service = _service(remove=None)
        response = asyncio.run(remove_member(member_id="member-bob", principal_id="principal-admin", service=service))
        assert response.status_code == 204

    def test_service_errors_propagate(self):
        service = _service(remove=AsyncMock(side_effect=PermissionDeniedError("Only admins can remove members")))
        with pytest.raises(PermissionDeniedError):
            asyncio.run(remove_member(member_id="member-bob", principal_id="principal-bob", service=service))
