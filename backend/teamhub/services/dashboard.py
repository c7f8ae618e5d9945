"""
Dashboard Aggregation

Read-only statistics over team tasks, budget and roster. Each figure is
computed from its own query; the numbers are presentation data and are
not a consistent snapshot of one instant.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from teamhub.core import ensure_utc
from teamhub.core.clock import to_date_string, utc_now
from teamhub.core.config import settings
from teamhub.core.constants import DASHBOARD_WINDOW_DAYS, TASK_STATUS_DONE, UNASSIGNED_NAME
from teamhub.repositories.budget import BudgetItemRepository
from teamhub.repositories.members import MemberRepository
from teamhub.repositories.tasks import TaskRepository
from teamhub.services.activity import ActivityService
from teamhub.services.identity import IdentityService

logger = logging.getLogger(__name__)


def percent_change(current: int, previous: int) -> int:
    if previous == 0:
        return 0 if current == 0 else 100
    return round((current - previous) / previous * 100)


class DashboardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.tasks = TaskRepository(db)
        self.budget_items = BudgetItemRepository(db)
        self.members = MemberRepository(db)
        self.identity = IdentityService(db)
        self.activity = ActivityService(db)

    async def get_stats(self, principal_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if await self.identity.resolve_member(principal_id) is None:
            return None

        now = utc_now()
        window = timedelta(days=DASHBOARD_WINDOW_DAYS)
        week_ago = now - window
        two_weeks_ago = now - 2 * window
        today = to_date_string(now.date())
        next_week = to_date_string((now + window).date())

        tasks = await self.tasks.list_team()
        by_status = {status: 0 for status in ("todo", "in-progress", "review", "done")}
        overdue = due_soon = created_last = created_previous = 0
        for task in tasks:
            by_status[task.status] = by_status.get(task.status, 0) + 1
            open_task = task.status != TASK_STATUS_DONE
            if open_task and task.due_date < today:
                overdue += 1
            elif open_task and task.due_date <= next_week:
                due_soon += 1

            created_at = ensure_utc(task.created_at)
            if created_at >= week_ago:
                created_last += 1
            elif created_at >= two_weeks_ago:
                created_previous += 1

        items = await self.budget_items.list_all()
        allocated = sum(item.allocated for item in items)
        spent = sum(item.spent for item in items)

        return {
            "total_tasks": len(tasks),
            "todo": by_status["todo"],
            "in_progress": by_status["in-progress"],
            "review": by_status["review"],
            "done": by_status["done"],
            "overdue": overdue,
            "due_soon": due_soon,
            "created_last_7_days": created_last,
            "created_previous_7_days": created_previous,
            "task_creation_change_percent": percent_change(created_last, created_previous),
            "budget_allocated": allocated,
            "budget_spent": spent,
            "budget_used_percent": round(spent / allocated * 100) if allocated > 0 else 0,
            "online_members": await self.members.count_online(),
        }

    async def get_due_tasks(self, principal_id: Optional[str], limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Open team tasks due within a week, overdue ones first."""
        if await self.identity.resolve_member(principal_id) is None:
            return []

        now = utc_now()
        today = to_date_string(now.date())
        next_week = to_date_string((now + timedelta(days=DASHBOARD_WINDOW_DAYS)).date())

        tasks = [
            t for t in await self.tasks.list_team()
            if t.status != TASK_STATUS_DONE and t.due_date <= next_week
        ]
        tasks.sort(key=lambda t: (t.due_date >= today, t.due_date))
        tasks = tasks[: limit or settings.DUE_TASKS_DEFAULT_LIMIT]

        assignees = {m.id: m for m in await self.members.get_many([t.assignee_id for t in tasks])}
        return [
            {
                "id": task.id,
                "title": task.title,
                "due_date": task.due_date,
                "priority": task.priority,
                "status": task.status,
                "is_overdue": task.due_date < today,
                "assignee_name": assignees[task.assignee_id].name if task.assignee_id in assignees else UNASSIGNED_NAME,
            }
            for task in tasks
        ]

    async def get_activity(self, principal_id: Optional[str], limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if await self.identity.resolve_member(principal_id) is None:
            return []
        return await self.activity.recent(limit)
