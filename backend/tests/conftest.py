"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any app imports to prevent
accidental connections to real databases.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any app code imports the settings singleton
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "15"
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_teamhub"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import pytest  # noqa: E402

from tests.mocks.teamhub import make_document, make_member, make_task, make_user  # noqa: E402


@pytest.fixture
def admin_member():
    """Roster entry with admin access, linked to principal ``principal-admin``."""
    return make_member(
        id="member-admin",
        name="Alice Admin",
        email="alice@example.com",
        access_level="admin",
        user_id="principal-admin",
    )


@pytest.fixture
def regular_member():
    """Roster entry with member access."""
    return make_member(
        id="member-bob",
        name="Bob Builder",
        email="bob@example.com",
        access_level="member",
        user_id="principal-bob",
    )


@pytest.fixture
def other_member():
    """A second non-admin member."""
    return make_member(
        id="member-carol",
        name="Carol Coder",
        email="carol@example.com",
        access_level="member",
        user_id="principal-carol",
    )


@pytest.fixture
def viewer_member():
    """Roster entry with read-only access."""
    return make_member(
        id="member-vic",
        name="Vic Viewer",
        email="vic@example.com",
        access_level="viewer",
        user_id="principal-vic",
    )


@pytest.fixture
def principal_user():
    """Identity-provider record for a principal with no roster entry yet."""
    return make_user(id="principal-new", name="Nora New", email="nora@example.com")


@pytest.fixture
def team_task(regular_member):
    return make_task(
        id="task-team",
        title="Ship the release",
        owner_id=regular_member.id,
        assignee_id=regular_member.id,
        visibility="team",
    )


@pytest.fixture
def personal_task(regular_member):
    return make_task(
        id="task-personal",
        title="Private notes",
        owner_id=regular_member.id,
        assignee_id=regular_member.id,
        visibility="personal",
    )


@pytest.fixture
def document(regular_member):
    return make_document(id="doc-1", created_by=regular_member.id)
