"""
Task Management

Team tasks are visible to every member. Personal tasks are visible to
their owner, their assignee and admins. Reads never raise for callers
who cannot see something; they return ``None`` or ``[]``. Mutations on
a task the caller cannot touch are rejected.

Only mutations on team tasks write to the activity log.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from teamhub.core.clock import utc_now
from teamhub.core.config import settings
from teamhub.core.constants import (
    ACTIVITY_COMMENTED,
    ACTIVITY_CREATED_TASK,
    ACTIVITY_DELETED_TASK,
    ACTIVITY_MOVED_TASK,
    ACTIVITY_UPDATED_TASK,
    TASK_STATUS_LABELS,
    VISIBILITY_TEAM,
)
from teamhub.core.exceptions import InvalidInputError, NotFoundError, PermissionDeniedError
from teamhub.core.metrics import tasks_mutations_total
from teamhub.core.permissions import can_access_task, can_delete_task, can_update_task, is_admin
from teamhub.core.updates import diff_against, is_noop, strip_unset
from teamhub.models.member import TeamMember
from teamhub.models.task import Comment, Task
from teamhub.repositories.members import MemberRepository
from teamhub.repositories.tasks import CommentRepository, TaskRepository
from teamhub.services.activity import ActivityService
from teamhub.services.identity import IdentityService

logger = logging.getLogger(__name__)

EMPTY_COMMENT_DETAIL = "Comment cannot be empty."


def _member_summary(member: Optional[TeamMember]) -> Optional[Dict[str, Any]]:
    if member is None:
        return None
    return member.model_dump()


class TaskService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.tasks = TaskRepository(db)
        self.comments = CommentRepository(db)
        self.members = MemberRepository(db)
        self.identity = IdentityService(db)
        self.activity = ActivityService(db)

    async def _hydrate(self, tasks: List[Task], with_comments: bool = True) -> List[Dict[str, Any]]:
        """Attach assignee, owner and comments (each with its author) to each task."""
        if not tasks:
            return []

        comments: List[Comment] = []
        if with_comments:
            comments = await self.comments.list_for_tasks([t.id for t in tasks])

        member_ids = [t.assignee_id for t in tasks] + [t.owner_id for t in tasks]
        member_ids += [c.author_id for c in comments]
        members = {m.id: m for m in await self.members.get_many(member_ids)}

        by_task: Dict[str, List[Dict[str, Any]]] = {}
        for comment in sorted(comments, key=lambda c: c.created_at):
            item = comment.model_dump()
            item["author"] = _member_summary(members.get(comment.author_id))
            by_task.setdefault(comment.task_id, []).append(item)

        result = []
        for task in tasks:
            item = task.model_dump()
            item["assignee"] = _member_summary(members.get(task.assignee_id))
            if with_comments:
                item["owner"] = _member_summary(members.get(task.owner_id))
                item["comments"] = by_task.get(task.id, [])
            result.append(item)
        return result

    async def _load_for_change(self, principal_id: Optional[str], task_id: str):
        member = await self.identity.require_member(principal_id)
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task")
        return member, task

    async def _log(self, task: Task, actor_id: str, action: str) -> None:
        if task.visibility == VISIBILITY_TEAM:
            await self.activity.log(actor_id, action, task.title)

    # -- reads ---------------------------------------------------------------

    async def list_team(self, principal_id: Optional[str]) -> List[Dict[str, Any]]:
        if await self.identity.resolve_member(principal_id) is None:
            return []
        return await self._hydrate(await self.tasks.list_team())

    async def list_personal(self, principal_id: Optional[str], owner_id: str) -> List[Dict[str, Any]]:
        """Personal tasks assigned to ``owner_id``; only that member and admins may look."""
        member = await self.identity.resolve_member(principal_id)
        if member is None:
            return []
        if member.id != owner_id and not is_admin(member):
            return []
        tasks = await self.tasks.list_personal_for_assignee(owner_id)
        return await self._hydrate([t for t in tasks if can_access_task(member, t)])

    async def list_recent(self, principal_id: Optional[str], limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if await self.identity.resolve_member(principal_id) is None:
            return []
        tasks = await self.tasks.list_recent_team(limit or settings.RECENT_TASKS_DEFAULT_LIMIT)
        return await self._hydrate(tasks, with_comments=False)

    async def get_by_id(self, principal_id: Optional[str], task_id: str) -> Optional[Dict[str, Any]]:
        member = await self.identity.resolve_member(principal_id)
        if member is None:
            return None
        task = await self.tasks.get_by_id(task_id)
        if task is None or not can_access_task(member, task):
            return None
        hydrated = await self._hydrate([task])
        return hydrated[0]

    # -- writes --------------------------------------------------------------

    async def create(self, principal_id: Optional[str], fields: Dict[str, Any]) -> Task:
        member = await self.identity.require_member(principal_id)
        fields = strip_unset(fields)

        owner_id = fields.pop("owner_id", None)
        if owner_id is not None and owner_id != member.id:
            logger.warning(f"Member {member.id} tried to create a task owned by {owner_id}")
            raise PermissionDeniedError("Tasks can only be created with yourself as owner")

        if await self.members.get_by_id(fields["assignee_id"]) is None:
            raise InvalidInputError("Assignee not found", field="assignee_id")

        task = Task(**fields, owner_id=member.id, created_at=utc_now())
        await self.tasks.create(task)
        await self._log(task, member.id, ACTIVITY_CREATED_TASK)
        tasks_mutations_total.labels(action="create").inc()
        logger.info(f"Member {member.id} created task {task.id} ({task.visibility})")
        return task

    async def update_status(self, principal_id: Optional[str], task_id: str, status: str) -> Task:
        member, task = await self._load_for_change(principal_id, task_id)
        if not can_update_task(member, task):
            logger.warning(f"Member {member.id} denied status change on task {task_id}")
            raise PermissionDeniedError("Not authorized to update this task")

        if task.status == status:
            return task

        updated = await self.tasks.update(task_id, {"status": status})
        label = TASK_STATUS_LABELS.get(status, status)
        await self._log(updated, member.id, ACTIVITY_MOVED_TASK.format(label=label))
        tasks_mutations_total.labels(action="status").inc()
        logger.info(f"Member {member.id} moved task {task_id} from {task.status} to {status}")
        return updated

    async def update(self, principal_id: Optional[str], task_id: str, patch: Any) -> Task:
        """Apply only the fields that were set; an empty patch changes nothing."""
        member, task = await self._load_for_change(principal_id, task_id)
        if not can_update_task(member, task):
            logger.warning(f"Member {member.id} denied edit on task {task_id}")
            raise PermissionDeniedError("Not authorized to update this task")

        changes = diff_against(strip_unset(patch), task)
        if is_noop(changes):
            return task

        if "assignee_id" in changes and await self.members.get_by_id(changes["assignee_id"]) is None:
            raise InvalidInputError("Assignee not found", field="assignee_id")

        updated = await self.tasks.update(task_id, changes)
        if task.visibility == VISIBILITY_TEAM or updated.visibility == VISIBILITY_TEAM:
            await self.activity.log(member.id, ACTIVITY_UPDATED_TASK, updated.title)
        tasks_mutations_total.labels(action="update").inc()
        logger.info(f"Member {member.id} updated task {task_id}: {sorted(changes)}")
        return updated

    async def add_comment(self, principal_id: Optional[str], task_id: str, content: str) -> Comment:
        member, task = await self._load_for_change(principal_id, task_id)
        if not can_access_task(member, task):
            logger.warning(f"Member {member.id} denied comment on task {task_id}")
            raise PermissionDeniedError("Not authorized to comment on this task")

        content = (content or "").strip()
        if not content:
            raise InvalidInputError(EMPTY_COMMENT_DETAIL, field="content")

        comment = Comment(task_id=task.id, author_id=member.id, content=content, created_at=utc_now())
        await self.comments.create(comment)
        await self._log(task, member.id, ACTIVITY_COMMENTED)
        tasks_mutations_total.labels(action="comment").inc()
        logger.info(f"Member {member.id} commented on task {task_id}")
        return comment

    async def remove(self, principal_id: Optional[str], task_id: str) -> None:
        member, task = await self._load_for_change(principal_id, task_id)
        if not can_delete_task(member, task):
            logger.warning(f"Member {member.id} denied delete of task {task_id}")
            raise PermissionDeniedError("Only the owner or an admin can delete this task")

        removed_comments = await self.comments.delete_for_task(task_id)
        await self.tasks.delete(task_id)
        await self._log(task, member.id, ACTIVITY_DELETED_TASK)
        tasks_mutations_total.labels(action="delete").inc()
        logger.info(f"Member {member.id} deleted task {task_id} and {removed_comments} comment(s)")
