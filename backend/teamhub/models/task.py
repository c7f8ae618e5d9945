import uuid
from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from teamhub.core.clock import utc_now
from teamhub.models.types import PyObjectId


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskVisibility(str, Enum):
    TEAM = "team"
    PERSONAL = "personal"


class Task(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    visibility: TaskVisibility = TaskVisibility.TEAM
    owner_id: str
    assignee_id: str
    due_date: str  # YYYY-MM-DD, compared lexicographically
    tags: List[str] = []
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)


class Comment(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    task_id: str
    author_id: str
    content: str
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True)
