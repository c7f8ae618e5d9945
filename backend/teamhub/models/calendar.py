import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.types import PyObjectId


class MilestoneStatus(str, Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class EventType(str, Enum):
    MEETING = "meeting"
    REVIEW = "review"
    PRESENTATION = "presentation"


class Milestone(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    title: str
    description: str = ""
    due_date: str
    status: MilestoneStatus = MilestoneStatus.UPCOMING
    progress: int = Field(0, ge=0, le=100)

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)


class Event(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    title: str
    date: str
    time: str
    type: EventType
    attendees: int = 0

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)
