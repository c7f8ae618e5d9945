from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.member import Department


class InviteCreate(BaseModel):
    expires_in_days: Optional[int] = Field(None, description="Days until the code expires (default 7)")


class InviteExtend(BaseModel):
    expires_in_days: Optional[int] = Field(None, description="Days to add to max(expiry, now) (default 7)")


class InviteRedeem(BaseModel):
    code: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    department: Department
    skills: Optional[List[str]] = None

    model_config = ConfigDict(use_enum_values=True)


class InviteCreated(BaseModel):
    id: str
    code: str
    expires_at: datetime


class InviteResponse(BaseModel):
    id: str = Field(..., alias="_id")
    code: str
    created_by: str
    created_at: datetime
    expires_at: datetime
    used_by: Optional[str] = None
    used_at: Optional[datetime] = None

    model_config = ConfigDict(populate_by_name=True)


class InviteListItem(InviteResponse):
    is_expired: bool
    is_used: bool
    creator_name: str
    used_by_name: Optional[str] = None


class InviteValidation(BaseModel):
    valid: bool
    reason: Optional[str] = None
    invite: Optional[InviteResponse] = None
