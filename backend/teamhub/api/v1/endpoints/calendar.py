from typing import List, Optional

from fastapi import Depends, Query

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.api.v1.helpers import RESP_AUTH, RESP_AUTH_404
from teamhub.schemas.calendar import (
    EventCreate,
    EventResponse,
    MilestoneCreate,
    MilestoneProgressUpdate,
    MilestoneResponse,
)
from teamhub.services.calendar import CalendarService

router = TeamHubRouter()


@router.get("/milestones", response_model=List[MilestoneResponse], responses={**RESP_AUTH})
async def list_milestones(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    return await service.list_milestones(principal_id)


@router.post("/milestones", response_model=MilestoneResponse, status_code=201, responses={**RESP_AUTH})
async def create_milestone(
    milestone_in: MilestoneCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    return await service.create_milestone(principal_id, milestone_in.model_dump())


@router.put("/milestones/{milestone_id}/progress", response_model=MilestoneResponse, responses={**RESP_AUTH_404})
async def update_milestone_progress(
    milestone_id: str,
    progress_in: MilestoneProgressUpdate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    return await service.update_milestone_progress(
        principal_id, milestone_id, progress_in.progress, progress_in.status
    )


@router.get("/events", response_model=List[EventResponse], responses={**RESP_AUTH})
async def list_events(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    """Events by date; filtered to one month when both ``year`` and ``month`` are given."""
    return await service.list_events(principal_id, year, month)


@router.post("/events", response_model=EventResponse, status_code=201, responses={**RESP_AUTH})
async def create_event(
    event_in: EventCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    return await service.create_event(principal_id, event_in.model_dump())
