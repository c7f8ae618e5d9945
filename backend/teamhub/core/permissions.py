"""
Access Control

Pure predicates over a resolved TeamMember and a target resource. Nothing
here touches the database; services load the records and ask these
functions, then raise the matching domain error themselves.
"""

from typing import Iterable

from teamhub.core.constants import (
    ACCESS_LEVEL_ADMIN,
    EDITOR_ACCESS_LEVELS,
    VISIBILITY_TEAM,
)
from teamhub.core.exceptions import PermissionDeniedError
from teamhub.models.document import Document
from teamhub.models.member import TeamMember
from teamhub.models.task import Task


def is_admin(member: TeamMember) -> bool:
    return member.access_level == ACCESS_LEVEL_ADMIN


def can_access_task(member: TeamMember, task: Task) -> bool:
    """Team tasks are open to everyone; personal tasks to owner, assignee and admins."""
    if task.visibility == VISIBILITY_TEAM:
        return True
    if is_admin(member):
        return True
    return member.id in (task.owner_id, task.assignee_id)


def can_update_task(member: TeamMember, task: Task) -> bool:
    # Update shares the read gate.
    return can_access_task(member, task)


def can_delete_task(member: TeamMember, task: Task) -> bool:
    """Only admins and the owner; being the assignee is not enough."""
    return is_admin(member) or task.owner_id == member.id


def can_edit_document(member: TeamMember) -> bool:
    return member.access_level in EDITOR_ACCESS_LEVELS


def can_delete_document(member: TeamMember, document: Document) -> bool:
    return is_admin(member) or document.created_by == member.id


def can_write_shared_content(member: TeamMember) -> bool:
    """Budget and calendar writes follow the document edit rule (viewers are read-only)."""
    return member.access_level in EDITOR_ACCESS_LEVELS


def require_admin(member: TeamMember, detail: str = "Only admins can perform this action") -> None:
    if not is_admin(member):
        raise PermissionDeniedError(detail)


def count_other_admins(members: Iterable[TeamMember], excluded_member_id: str) -> int:
    """Number of admins left once ``excluded_member_id`` is demoted or removed."""
    return sum(1 for m in members if is_admin(m) and m.id != excluded_member_id)
