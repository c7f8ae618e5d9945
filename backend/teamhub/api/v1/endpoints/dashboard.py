from typing import List, Optional

from fastapi import Depends, Query

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.schemas.dashboard import ActivityItem, DashboardStats, DueTask
from teamhub.services.dashboard import DashboardService

router = TeamHubRouter()


@router.get("/stats", response_model=Optional[DashboardStats])
async def read_stats(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    """Task, budget and roster figures; null for callers not on the roster."""
    return await service.get_stats(principal_id)


@router.get("/due-tasks", response_model=List[DueTask])
async def read_due_tasks(
    limit: Optional[int] = Query(None, ge=1, le=50),
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return await service.get_due_tasks(principal_id, limit)


@router.get("/activity", response_model=List[ActivityItem])
async def read_activity(
    limit: Optional[int] = Query(None, ge=1, le=100),
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return await service.get_activity(principal_id, limit)
