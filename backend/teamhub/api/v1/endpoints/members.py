from typing import List, Optional

from fastapi import Depends, Response, status

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.api.v1.helpers import RESP_409, RESP_AUTH, RESP_AUTH_404
from teamhub.schemas.member import (
    JoinRequest,
    MemberCreate,
    MemberIdResponse,
    MemberResponse,
    MemberStatusUpdate,
    MemberUpdate,
)
from teamhub.services.members import MemberService

router = TeamHubRouter()


@router.get("/", response_model=List[MemberResponse])
async def list_members(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    """List the roster. Empty for callers who are not on it."""
    return await service.list(principal_id)


@router.get("/me", response_model=Optional[MemberResponse])
async def read_current_member(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    """The caller's roster entry, or null when the caller has not joined."""
    return await service.get_current_member(principal_id)


@router.post("/join", response_model=MemberIdResponse, responses={**RESP_AUTH})
async def join_team(
    join_in: JoinRequest,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    """Register the caller. The first member of an empty roster becomes admin."""
    member_id = await service.add_self_as_first_member_or_join(
        principal_id, role=join_in.role, department=join_in.department
    )
    return {"member_id": member_id}


@router.get("/by-email/{email}", response_model=Optional[MemberResponse])
async def read_member_by_email(
    email: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    return await service.get_by_email(principal_id, email)


@router.get("/{member_id}", response_model=Optional[MemberResponse])
async def read_member(
    member_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    return await service.get_by_id(principal_id, member_id)


@router.post("/", response_model=MemberResponse, status_code=201, responses={**RESP_AUTH, **RESP_409})
async def create_member(
    member_in: MemberCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    """Add a roster entry. Admin only."""
    return await service.create(principal_id, member_in.model_dump())


@router.patch("/{member_id}", response_model=MemberResponse, responses={**RESP_AUTH_404})
async def update_member(
    member_id: str,
    member_in: MemberUpdate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    """
    Update a member. Members may edit their own role, department and
    skills; everything else, including access level, is admin only.
    """
    return await service.update(principal_id, member_id, member_in)


@router.put("/{member_id}/status", response_model=MemberResponse, responses={**RESP_AUTH_404})
async def update_member_status(
    member_id: str,
    status_in: MemberStatusUpdate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    return await service.update_status(principal_id, member_id, status_in.status)


@router.delete("/{member_id}", status_code=204, responses={**RESP_AUTH_404})
async def remove_member(
    member_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: MemberService = Depends(deps.get_member_service),
):
    await service.remove(principal_id, member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
