import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.core import ensure_utc
from teamhub.core.clock import utc_now
from teamhub.models.types import PyObjectId


class Invite(BaseModel):
    """
    Single-use, time-boxed join code.

    "Expired" is never stored: it is derived from ``expires_at`` at read
    time, and the record stays until it is revoked.
    """

    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    code: str
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    used_by: Optional[str] = None
    used_at: Optional[datetime] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_used(self) -> bool:
        return self.used_by is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or utc_now()
        return ensure_utc(self.expires_at) <= now
