"""
Schema Exports

Request and response models for the HTTP API. Request models carry the
validation of payload shape (enums, date formats, ranges); the services
enforce everything that depends on stored state.
"""

from teamhub.schemas.budget import (
    BudgetCategoryCreate,
    BudgetCategoryResponse,
    BudgetItemResponse,
    BudgetStats,
    ExpenseCreate,
    ExpenseResponse,
)
from teamhub.schemas.calendar import (
    EventCreate,
    EventResponse,
    MilestoneCreate,
    MilestoneProgressUpdate,
    MilestoneResponse,
)
from teamhub.schemas.dashboard import ActivityItem, DashboardStats, DueTask
from teamhub.schemas.document import (
    DocumentCreate,
    DocumentIdResponse,
    DocumentListItem,
    DocumentMetadataUpdate,
    DocumentResponse,
    DocumentVersionCreate,
    DocumentVersionResponse,
    DownloadUrlResponse,
    StoredBlobResponse,
    UploadUrlResponse,
)
from teamhub.schemas.invite import (
    InviteCreate,
    InviteCreated,
    InviteExtend,
    InviteListItem,
    InviteRedeem,
    InviteResponse,
    InviteValidation,
)
from teamhub.schemas.member import (
    JoinRequest,
    MemberCreate,
    MemberIdResponse,
    MemberResponse,
    MemberStatusUpdate,
    MemberUpdate,
)
from teamhub.schemas.task import (
    CommentCreate,
    CommentResponse,
    HydratedTaskResponse,
    TaskCreate,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)

__all__ = [
    "ActivityItem",
    "BudgetCategoryCreate",
    "BudgetCategoryResponse",
    "BudgetItemResponse",
    "BudgetStats",
    "CommentCreate",
    "CommentResponse",
    "DashboardStats",
    "DocumentCreate",
    "DocumentIdResponse",
    "DocumentListItem",
    "DocumentMetadataUpdate",
    "DocumentResponse",
    "DocumentVersionCreate",
    "DocumentVersionResponse",
    "DownloadUrlResponse",
    "DueTask",
    "EventCreate",
    "EventResponse",
    "ExpenseCreate",
    "ExpenseResponse",
    "HydratedTaskResponse",
    "InviteCreate",
    "InviteCreated",
    "InviteExtend",
    "InviteListItem",
    "InviteRedeem",
    "InviteResponse",
    "InviteValidation",
    "JoinRequest",
    "MemberCreate",
    "MemberIdResponse",
    "MemberResponse",
    "MemberStatusUpdate",
    "MemberUpdate",
    "MilestoneCreate",
    "MilestoneProgressUpdate",
    "MilestoneResponse",
    "StoredBlobResponse",
    "TaskCreate",
    "TaskResponse",
    "TaskStatusUpdate",
    "TaskUpdate",
    "UploadUrlResponse",
]
