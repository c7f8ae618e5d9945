from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.calendar import EventType, MilestoneStatus

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class MilestoneCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    due_date: str = Field(..., pattern=DATE_PATTERN)
    status: MilestoneStatus = MilestoneStatus.UPCOMING
    progress: int = Field(0, ge=0, le=100)

    model_config = ConfigDict(use_enum_values=True)


class MilestoneProgressUpdate(BaseModel):
    progress: int = Field(..., ge=0, le=100)
    status: Optional[MilestoneStatus] = None

    model_config = ConfigDict(use_enum_values=True)


class MilestoneResponse(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    description: str
    due_date: str
    status: str
    progress: int

    model_config = ConfigDict(populate_by_name=True)


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)
    time: str = Field(..., min_length=1, description="Display time, e.g. 10:00 AM")
    type: EventType
    attendees: int = Field(0, ge=0)

    model_config = ConfigDict(use_enum_values=True)


class EventResponse(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    date: str
    time: str
    type: str
    attendees: int

    model_config = ConfigDict(populate_by_name=True)
