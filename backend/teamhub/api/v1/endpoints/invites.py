from typing import List, Optional

from fastapi import Depends, Response, status

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.api.v1.helpers import RESP_409, RESP_AUTH, RESP_AUTH_400, RESP_AUTH_400_404
from teamhub.schemas.invite import (
    InviteCreate,
    InviteCreated,
    InviteExtend,
    InviteListItem,
    InviteRedeem,
    InviteResponse,
    InviteValidation,
)
from teamhub.schemas.member import MemberIdResponse
from teamhub.services.invites import InviteService

router = TeamHubRouter()


@router.post("/", response_model=InviteCreated, status_code=201, responses={**RESP_AUTH_400})
async def create_invite(
    invite_in: Optional[InviteCreate] = None,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: InviteService = Depends(deps.get_invite_service),
):
    """Issue a join code. Admin only; the code is returned only here."""
    return await service.create(principal_id, invite_in.expires_in_days if invite_in else None)


@router.get("/", response_model=List[InviteListItem])
async def list_invites(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: InviteService = Depends(deps.get_invite_service),
):
    """All invites for admins; an empty list for everyone else."""
    return await service.list(principal_id)


@router.get("/validate/{code}", response_model=InviteValidation)
async def validate_invite(
    code: str,
    service: InviteService = Depends(deps.get_invite_service),
):
    return await service.validate(code)


@router.post("/redeem", response_model=MemberIdResponse, responses={**RESP_AUTH_400, **RESP_409})
async def redeem_invite(
    redeem_in: InviteRedeem,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: InviteService = Depends(deps.get_invite_service),
):
    member_id = await service.redeem(
        principal_id,
        redeem_in.code,
        redeem_in.role,
        redeem_in.department,
        redeem_in.skills,
    )
    return {"member_id": member_id}


@router.post("/{invite_id}/extend", response_model=InviteResponse, responses={**RESP_AUTH_400_404})
async def extend_invite(
    invite_id: str,
    extend_in: Optional[InviteExtend] = None,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: InviteService = Depends(deps.get_invite_service),
):
    return await service.extend(principal_id, invite_id, extend_in.expires_in_days if extend_in else None)


@router.delete("/{invite_id}", status_code=204, responses={**RESP_AUTH_400_404})
async def revoke_invite(
    invite_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: InviteService = Depends(deps.get_invite_service),
):
    await service.revoke(principal_id, invite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
