from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from teamhub.models.member import AccessLevel, Department, PresenceStatus


class MemberCreate(BaseModel):
    """Admin-created roster entry."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    role: str = Field(..., min_length=1)
    avatar: str = ""
    department: Department
    status: PresenceStatus = PresenceStatus.OFFLINE
    access_level: AccessLevel = AccessLevel.MEMBER
    skills: Optional[List[str]] = None

    model_config = ConfigDict(use_enum_values=True)


class MemberUpdate(BaseModel):
    """Partial update. Omitted fields are left as they are."""

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[str] = Field(None, min_length=1)
    avatar: Optional[str] = None
    department: Optional[Department] = None
    access_level: Optional[AccessLevel] = None
    skills: Optional[List[str]] = None

    model_config = ConfigDict(use_enum_values=True)


class MemberStatusUpdate(BaseModel):
    status: PresenceStatus

    model_config = ConfigDict(use_enum_values=True)


class JoinRequest(BaseModel):
    role: Optional[str] = None
    department: Optional[Department] = None

    model_config = ConfigDict(use_enum_values=True)


class MemberResponse(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    email: str
    role: str
    avatar: str = ""
    department: str
    status: str
    access_level: str
    skills: Optional[List[str]] = None
    user_id: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class MemberIdResponse(BaseModel):
    member_id: str
