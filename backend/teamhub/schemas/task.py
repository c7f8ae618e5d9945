from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.task import TaskPriority, TaskStatus, TaskVisibility
from teamhub.schemas.member import MemberResponse

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    visibility: TaskVisibility = TaskVisibility.TEAM
    owner_id: Optional[str] = Field(None, description="Must be the caller when given")
    assignee_id: str
    due_date: str = Field(..., pattern=DATE_PATTERN)
    tags: List[str] = []

    model_config = ConfigDict(use_enum_values=True)


class TaskUpdate(BaseModel):
    """Partial update. Omitted fields are left as they are."""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    visibility: Optional[TaskVisibility] = None
    assignee_id: Optional[str] = None
    due_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    tags: Optional[List[str]] = None

    model_config = ConfigDict(use_enum_values=True)


class TaskStatusUpdate(BaseModel):
    status: TaskStatus

    model_config = ConfigDict(use_enum_values=True)


class CommentCreate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: str = Field(..., alias="_id")
    task_id: str
    author_id: str
    content: str
    created_at: datetime
    author: Optional[MemberResponse] = None

    model_config = ConfigDict(populate_by_name=True)


class TaskResponse(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    description: str
    status: str
    priority: str
    visibility: str
    owner_id: str
    assignee_id: str
    due_date: str
    tags: List[str]
    created_at: datetime

    model_config = ConfigDict(populate_by_name=True)


class HydratedTaskResponse(TaskResponse):
    assignee: Optional[MemberResponse] = None
    owner: Optional[MemberResponse] = None
    comments: Optional[List[CommentResponse]] = None
