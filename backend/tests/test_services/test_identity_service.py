"""Tests for principal-to-member resolution."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from teamhub.core.exceptions import AuthenticationRequiredError, MembershipRequiredError
from teamhub.services.identity import IdentityService
from tests.mocks.mongodb import create_mock_db
from tests.mocks.teamhub import make_member, make_user


def _service(by_link=None, by_email=None, user=None):
    service = IdentityService(create_mock_db())
    service.members = MagicMock()
    service.members.get_by_user_id = AsyncMock(return_value=by_link)
    service.members.get_by_email = AsyncMock(return_value=by_email)
    service.users = MagicMock()
    service.users.get_by_id = AsyncMock(return_value=user)
    return service


class TestResolveMember:
    def test_direct_link_wins(self):
        linked = make_member(id="m-linked", user_id="p1")
        service = _service(by_link=linked, by_email=make_member(id="m-email"))

        assert asyncio.run(service.resolve_member("p1")) is linked
        service.members.get_by_email.assert_not_called()

    def test_falls_back_to_email(self):
        by_email = make_member(id="m-email", email="old@example.com")
        service = _service(by_email=by_email, user=make_user(id="p1", email="old@example.com"))

        assert asyncio.run(service.resolve_member("p1")) is by_email
        service.members.get_by_email.assert_called_once_with("old@example.com")

    def test_principal_without_email(self):
        service = _service(user=make_user(id="p1", email=None))
        assert asyncio.run(service.resolve_member("p1")) is None
        service.members.get_by_email.assert_not_called()

    def test_unknown_principal(self):
        service = _service(user=None)
        assert asyncio.run(service.resolve_member("p1")) is None

    def test_no_principal_skips_lookups(self):
        service = _service()
        assert asyncio.run(service.resolve_member(None)) is None
        service.members.get_by_user_id.assert_not_called()


class TestRequireMember:
    def test_unauthenticated(self):
        with pytest.raises(AuthenticationRequiredError):
            asyncio.run(_service().require_member(None))

    def test_not_on_roster(self):
        service = _service(user=make_user(id="p1"))
        with pytest.raises(MembershipRequiredError):
            asyncio.run(service.require_member("p1"))

    def test_returns_member(self):
        member = make_member(user_id="p1")
        assert asyncio.run(_service(by_link=member).require_member("p1")) is member
