import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.core.clock import utc_now
from teamhub.models.types import PyObjectId


class DocumentFileType(str, Enum):
    PDF = "pdf"
    MARKDOWN = "markdown"
    JSONL = "jsonl"
    OTHER = "other"


class Document(BaseModel):
    """
    A document and a denormalized copy of its latest version.

    ``file_name``, ``file_type``, ``mime_type``, ``size``, ``storage_id``
    and ``current_version`` always mirror the newest DocumentVersion.
    """

    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    title: str
    file_name: str
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    file_type: DocumentFileType = DocumentFileType.OTHER
    mime_type: str
    size: int
    storage_id: str
    created_by: str
    current_version: int = 1
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)


class DocumentVersion(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    document_id: str
    version: int
    storage_id: str
    file_name: str
    mime_type: str
    size: int
    uploaded_by: str
    change_note: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True)
