from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadUrlResponse(BaseModel):
    upload_url: str


class StoredBlobResponse(BaseModel):
    storage_id: str


class DocumentCreate(BaseModel):
    title: Optional[str] = None
    file_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    mime_type: str
    size: int = Field(..., ge=0)
    storage_id: str


class DocumentVersionCreate(BaseModel):
    storage_id: str
    file_name: Optional[str] = None
    mime_type: str
    size: int = Field(..., ge=0)
    change_note: Optional[str] = None


class DocumentMetadataUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None


class DocumentResponse(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    file_name: str
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    file_type: str
    mime_type: str
    size: int
    storage_id: str
    created_by: str
    current_version: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True)


class DocumentListItem(DocumentResponse):
    creator_name: str
    creator_email: Optional[str] = None
    version_count: int
    can_edit: bool
    can_delete: bool


class DocumentVersionResponse(BaseModel):
    id: str = Field(..., alias="_id")
    document_id: str
    version: int
    storage_id: str
    file_name: str
    mime_type: str
    size: int
    uploaded_by: str
    change_note: Optional[str] = None
    created_at: datetime
    uploader_name: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class DownloadUrlResponse(BaseModel):
    url: str
    file_name: str
    mime_type: str
    version: int


class DocumentIdResponse(BaseModel):
    document_id: str
