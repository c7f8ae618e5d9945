from typing import List, Optional

from fastapi import Depends, Query, Response, status

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.api.v1.helpers import RESP_AUTH_400, RESP_AUTH_400_404, RESP_AUTH_404
from teamhub.schemas.task import (
    CommentCreate,
    CommentResponse,
    HydratedTaskResponse,
    TaskCreate,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)
from teamhub.services.tasks import TaskService

router = TeamHubRouter()


@router.get("/", response_model=List[HydratedTaskResponse])
async def list_team_tasks(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    return await service.list_team(principal_id)


@router.get("/recent", response_model=List[HydratedTaskResponse])
async def list_recent_tasks(
    limit: Optional[int] = Query(None, ge=1, le=50),
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    return await service.list_recent(principal_id, limit)


@router.get("/personal/{owner_id}", response_model=List[HydratedTaskResponse])
async def list_personal_tasks(
    owner_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    """Personal tasks assigned to ``owner_id``. Only that member and admins see them."""
    return await service.list_personal(principal_id, owner_id)


@router.get("/{task_id}", response_model=Optional[HydratedTaskResponse])
async def read_task(
    task_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    """The task, or null when it does not exist or is not visible to the caller."""
    return await service.get_by_id(principal_id, task_id)


@router.post("/", response_model=TaskResponse, status_code=201, responses={**RESP_AUTH_400})
async def create_task(
    task_in: TaskCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    return await service.create(principal_id, task_in.model_dump())


@router.put("/{task_id}/status", response_model=TaskResponse, responses={**RESP_AUTH_404})
async def update_task_status(
    task_id: str,
    status_in: TaskStatusUpdate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    return await service.update_status(principal_id, task_id, status_in.status)


@router.patch("/{task_id}", response_model=TaskResponse, responses={**RESP_AUTH_400_404})
async def update_task(
    task_id: str,
    task_in: TaskUpdate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    return await service.update(principal_id, task_id, task_in)


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=201, responses={**RESP_AUTH_400_404})
async def add_comment(
    task_id: str,
    comment_in: CommentCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    return await service.add_comment(principal_id, task_id, comment_in.content)


@router.delete("/{task_id}", status_code=204, responses={**RESP_AUTH_404})
async def delete_task(
    task_id: str,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: TaskService = Depends(deps.get_task_service),
):
    await service.remove(principal_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
