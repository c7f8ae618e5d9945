from typing import List, Optional

from fastapi import Depends, Query

from teamhub.api import deps
from teamhub.api.router import TeamHubRouter
from teamhub.api.v1.helpers import RESP_409, RESP_AUTH
from teamhub.schemas.budget import (
    BudgetCategoryCreate,
    BudgetCategoryResponse,
    BudgetItemResponse,
    BudgetStats,
    ExpenseCreate,
    ExpenseResponse,
)
from teamhub.services.budget import BudgetService

router = TeamHubRouter()


@router.get("/categories", response_model=List[BudgetCategoryResponse], responses={**RESP_AUTH})
async def list_categories(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: BudgetService = Depends(deps.get_budget_service),
):
    return await service.list_categories(principal_id)


@router.post("/categories", response_model=BudgetItemResponse, status_code=201, responses={**RESP_AUTH, **RESP_409})
async def create_category(
    category_in: BudgetCategoryCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: BudgetService = Depends(deps.get_budget_service),
):
    return await service.create_category(principal_id, category_in.category, category_in.allocated)


@router.get("/stats", response_model=BudgetStats, responses={**RESP_AUTH})
async def read_budget_stats(
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: BudgetService = Depends(deps.get_budget_service),
):
    return await service.get_stats(principal_id)


@router.get("/expenses", response_model=List[ExpenseResponse], responses={**RESP_AUTH})
async def list_expenses(
    limit: Optional[int] = Query(None, ge=1, le=100),
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: BudgetService = Depends(deps.get_budget_service),
):
    return await service.list_expenses(principal_id, limit)


@router.post("/expenses", response_model=ExpenseResponse, status_code=201, responses={**RESP_AUTH})
async def create_expense(
    expense_in: ExpenseCreate,
    principal_id: Optional[str] = Depends(deps.get_principal_id),
    service: BudgetService = Depends(deps.get_budget_service),
):
    """Record an expense. Approved expenses count against their category."""
    return await service.create_expense(principal_id, expense_in.model_dump())
