import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from teamhub.core.clock import utc_now
from teamhub.models.types import PyObjectId


class ExpenseStatus(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class BudgetItem(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    category: str
    allocated: float
    spent: float = 0

    model_config = ConfigDict(populate_by_name=True)


class Expense(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    description: str
    amount: float
    category: str
    date: str
    status: ExpenseStatus
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)
