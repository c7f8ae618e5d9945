import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.types import PyObjectId


class Department(str, Enum):
    ENGINEERING = "engineering"
    DESIGN = "design"
    FINANCE = "finance"
    PRODUCT = "product"
    MARKETING = "marketing"


class PresenceStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    AWAY = "away"


class AccessLevel(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class TeamMember(BaseModel):
    """
    A roster entry.

    Distinct from the identity-provider principal stored in ``users``;
    ``user_id`` links the two when known. Older entries and entries
    created by an admin may only carry the email.
    """

    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    name: str
    email: str
    role: str
    avatar: str = ""
    department: Department
    status: PresenceStatus = PresenceStatus.ONLINE
    access_level: AccessLevel = AccessLevel.MEMBER
    skills: Optional[List[str]] = None
    user_id: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)
