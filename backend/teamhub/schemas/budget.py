from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.budget import ExpenseStatus


class BudgetCategoryCreate(BaseModel):
    category: str = Field(..., min_length=1)
    allocated: float = Field(..., ge=0)


class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: str
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    status: ExpenseStatus

    model_config = ConfigDict(use_enum_values=True)


class BudgetItemResponse(BaseModel):
    id: str = Field(..., alias="_id")
    category: str
    allocated: float
    spent: float

    model_config = ConfigDict(populate_by_name=True)


class BudgetCategoryResponse(BudgetItemResponse):
    remaining: float


class BudgetStats(BaseModel):
    total_allocated: float
    total_spent: float
    total_remaining: float
    spent_percentage: float


class ExpenseResponse(BaseModel):
    id: str = Field(..., alias="_id")
    description: str
    amount: float
    category: str
    date: str
    status: str
    created_at: datetime

    model_config = ConfigDict(populate_by_name=True)
