from typing import List, Optional

from fastapi import Depends, Query, Response, status

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.api.v1.helpers import RESP_502, RESP_AUTH, RESP_AUTH_400, RESP_AUTH_400_404, RESP_AUTH_404
from teamhub.schemas.document import (
    DocumentCreate,
    DocumentIdResponse,
    DocumentListItem,
    DocumentMetadataUpdate,
    DocumentResponse,
    DocumentVersionCreate,
    DocumentVersionResponse,
    DownloadUrlResponse,
    UploadUrlResponse,
)
from teamhub.services.documents import DocumentService

router = TeamHubRouter()


@router.post("/upload-url", response_model=UploadUrlResponse, responses={**RESP_AUTH})
async def generate_upload_url(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    """
    First step of an upload: a short-lived URL the client POSTs the file
    to. The response of that POST carries the ``storage_id`` to register.
    """
    return {"upload_url": await service.generate_upload_url(principal_id)}


@router.post("/", response_model=DocumentIdResponse, status_code=201, responses={**RESP_AUTH_400, **RESP_502})
async def create_document(
    document_in: DocumentCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    document_id = await service.create_from_upload(principal_id, document_in.model_dump())
    return {"document_id": document_id}


@router.get("/", response_model=List[DocumentListItem])
async def list_documents(
    search: Optional[str] = Query(None, description="Case-insensitive match on title, file name, description and tags"),
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    return await service.list(principal_id, search)


@router.get("/{document_id}/versions", response_model=List[DocumentVersionResponse])
async def list_document_versions(
    document_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    """Versions newest first."""
    return await service.list_versions(principal_id, document_id)


@router.post(
    "/{document_id}/versions",
    response_model=DocumentVersionResponse,
    status_code=201,
    responses={**RESP_AUTH_400_404, **RESP_502},
)
async def add_document_version(
    document_id: str,
    version_in: DocumentVersionCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    return await service.add_version(principal_id, {**version_in.model_dump(), "document_id": document_id})


@router.get("/{document_id}/download", response_model=DownloadUrlResponse, responses={**RESP_AUTH_404})
async def get_download_url(
    document_id: str,
    version_id: Optional[str] = Query(None, description="A specific version; defaults to the current one"),
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    return await service.get_download_url(principal_id, document_id, version_id)


@router.patch("/{document_id}", response_model=DocumentResponse, responses={**RESP_AUTH_404})
async def update_document_metadata(
    document_id: str,
    metadata_in: DocumentMetadataUpdate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    return await service.update_metadata(principal_id, document_id, metadata_in.model_dump(exclude_unset=True))


@router.delete("/{document_id}", status_code=204, responses={**RESP_AUTH_404, **RESP_502})
async def delete_document(
    document_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DocumentService = Depends(deps.get_document_service),
):
    """Delete the document, every version, and each distinct blob they reference."""
    await service.remove(principal_id, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
