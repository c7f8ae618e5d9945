from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.types import PyObjectId


class User(BaseModel):
    """Authenticated principal as recorded by the identity provider."""

    id: PyObjectId = Field(..., validation_alias="_id", serialization_alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
