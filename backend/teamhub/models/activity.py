import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from teamhub.core.clock import utc_now
from teamhub.models.types import PyObjectId


class ActivityLogEntry(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    user_id: str  # TeamMember id of the actor
    action: str
    target: str
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True)
