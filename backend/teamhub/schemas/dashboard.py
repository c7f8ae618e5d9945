from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DashboardStats(BaseModel):
    total_tasks: int
    todo: int
    in_progress: int
    review: int
    done: int
    overdue: int
    due_soon: int
    created_last_7_days: int
    created_previous_7_days: int
    task_creation_change_percent: int
    budget_allocated: float
    budget_spent: float
    budget_used_percent: int
    online_members: int


class DueTask(BaseModel):
    id: str
    title: str
    due_date: str
    priority: str
    status: str
    is_overdue: bool
    assignee_name: str


class ActivityItem(BaseModel):
    id: str = Field(..., alias="_id")
    user_id: str
    action: str
    target: str
    created_at: datetime
    user_name: str

    model_config = ConfigDict(populate_by_name=True)
