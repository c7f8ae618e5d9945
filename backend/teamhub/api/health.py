"""
Kubernetes-style probes.

``/live`` answers as long as the process serves requests. ``/ready``
requires MongoDB to answer a ping; the blob bucket shares the same
database, so it is reported alongside but does not gate readiness.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from teamhub.core.config import settings
from teamhub.db.mongodb import db

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/live", summary="Liveness Probe")
async def liveness():
    return {"status": "alive"}


@router.get("/ready", summary="Readiness Probe")
async def readiness():
    if db.client is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "components": {"database": "client_not_initialized"}},
        )

    components = {}
    try:
        await db.client.admin.command("ping")
        components["database"] = "connected"
    except PyMongoError as e:
        logger.warning(f"Readiness ping failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "components": {"database": f"error: {e}"}},
        )

    bucket_files = db.client[settings.DATABASE_NAME][f"{settings.STORAGE_BUCKET_NAME}.files"]
    try:
        await bucket_files.find_one({}, {"_id": 1})
        components["storage"] = f"gridfs:{settings.STORAGE_BUCKET_NAME}"
    except PyMongoError as e:
        components["storage"] = f"error: {e}"

    return {"status": "ready", "components": components}
