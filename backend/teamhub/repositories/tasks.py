"""
Task and Comment Repositories
"""

from typing import List

import pymongo

from teamhub.core.constants import VISIBILITY_PERSONAL, VISIBILITY_TEAM
from teamhub.models.task import Comment, Task
from teamhub.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    collection_name = "tasks"
    model_class = Task

    async def list_team(self) -> List[Task]:
        return await self.find_many({"visibility": VISIBILITY_TEAM}, sort="created_at", sort_order=-1)

    async def list_personal_for_assignee(self, assignee_id: str) -> List[Task]:
        return await self.find_many(
            {"assignee_id": assignee_id, "visibility": VISIBILITY_PERSONAL},
            sort="created_at",
            sort_order=-1,
        )

    async def list_recent_team(self, limit: int) -> List[Task]:
        return await self.find_many(
            {"visibility": VISIBILITY_TEAM},
            sort=[("created_at", pymongo.DESCENDING)],
            limit=limit,
        )


class CommentRepository(BaseRepository[Comment]):
    collection_name = "comments"
    model_class = Comment

    async def list_for_task(self, task_id: str) -> List[Comment]:
        return await self.find_many({"task_id": task_id}, sort="created_at")

    async def list_for_tasks(self, task_ids: List[str]) -> List[Comment]:
        if not task_ids:
            return []
        return await self.find_many({"task_id": {"$in": task_ids}}, sort="created_at")

    async def delete_for_task(self, task_id: str) -> int:
        return await self.delete_many({"task_id": task_id})
