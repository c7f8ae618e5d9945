"""
Signed blob transfer endpoints.

These are reached through URLs minted by the document service; the
token in the path is the only credential they accept.
"""

import logging
from urllib.parse import quote

from fastapi import Depends, File, UploadFile
from fastapi.responses import StreamingResponse

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.api.v1.helpers import RESP_401, RESP_404, RESP_502
from teamhub.core.exceptions import AuthenticationRequiredError
from teamhub.core.security import verify_download_token, verify_upload_token
from teamhub.schemas.document import StoredBlobResponse
from teamhub.services.storage import BlobStorage

router = TeamHubRouter()
logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@router.post("/upload/{token}", response_model=StoredBlobResponse, status_code=201, responses={**RESP_401, **RESP_502})
async def upload_blob(
    token: str,
    file: UploadFile = File(...),
    storage: BlobStorage = Depends(deps.get_blob_storage),
):
    member_id = verify_upload_token(token)
    if not member_id:
        raise AuthenticationRequiredError("Upload link expired or invalid")

    content = await file.read()
    storage_id = await storage.store(
        file.filename or "upload",
        content,
        file.content_type or DEFAULT_CONTENT_TYPE,
        member_id,
    )
    return {"storage_id": storage_id}


@router.get("/download/{token}", responses={**RESP_401, **RESP_404, **RESP_502})
async def download_blob(
    token: str,
    storage: BlobStorage = Depends(deps.get_blob_storage),
):
    storage_id = verify_download_token(token)
    if not storage_id:
        raise AuthenticationRequiredError("Download link expired or invalid")

    grid_out = await storage.open_download(storage_id)
    metadata = grid_out.metadata or {}

    async def iter_chunks():
        while True:
            chunk = await grid_out.readchunk()
            if not chunk:
                break
            yield chunk

    return StreamingResponse(
        iter_chunks(),
        media_type=metadata.get("content_type", DEFAULT_CONTENT_TYPE),
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(grid_out.filename or storage_id)}",
            "Content-Length": str(grid_out.length),
        },
    )
