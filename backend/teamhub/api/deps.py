"""
Request-boundary dependencies.

The bearer token is decoded once per request into a principal id, which
is handed to the services explicitly. A missing or invalid token yields
``None``; the services decide whether that is acceptable.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from teamhub.core import security
from teamhub.db.mongodb import get_database
from teamhub.services.budget import BudgetService
from teamhub.services.calendar import CalendarService
from teamhub.services.dashboard import DashboardService
from teamhub.services.documents import DocumentService
from teamhub.services.invites import InviteService
from teamhub.services.members import MemberService
from teamhub.services.storage import BlobStorage
from teamhub.services.tasks import TaskService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_principal_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is None:
        return None
    return security.decode_access_token(credentials.credentials)


def get_member_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> MemberService:
    return MemberService(db)


def get_invite_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> InviteService:
    return InviteService(db)


def get_task_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> TaskService:
    return TaskService(db)


def get_document_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> DocumentService:
    return DocumentService(db)


def get_blob_storage(db: AsyncIOMotorDatabase = Depends(get_database)) -> BlobStorage:
    return BlobStorage(db)


def get_dashboard_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> DashboardService:
    return DashboardService(db)


def get_budget_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> BudgetService:
    return BudgetService(db)


def get_calendar_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> CalendarService:
    return CalendarService(db)
