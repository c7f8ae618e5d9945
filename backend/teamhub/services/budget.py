import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from teamhub.core.clock import utc_now
from teamhub.core.config import settings
from teamhub.core.exceptions import ConflictError, PermissionDeniedError
from teamhub.core.permissions import can_write_shared_content
from teamhub.models.budget import BudgetItem, Expense, ExpenseStatus
from teamhub.models.member import TeamMember
from teamhub.repositories.budget import BudgetItemRepository, ExpenseRepository
from teamhub.services.identity import IdentityService

logger = logging.getLogger(__name__)


class BudgetService:
    """Budget categories and expenses. Viewers can read but not write."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.items = BudgetItemRepository(db)
        self.expenses = ExpenseRepository(db)
        self.identity = IdentityService(db)

    async def _require_writer(self, principal_id: Optional[str]) -> TeamMember:
        member = await self.identity.require_member(principal_id)
        if not can_write_shared_content(member):
            logger.warning(f"Viewer {member.id} attempted a budget write")
            raise PermissionDeniedError("Read-only access. Ask an admin to grant edit access.")
        return member

    async def list_categories(self, principal_id: Optional[str]) -> List[Dict[str, Any]]:
        await self.identity.require_member(principal_id)
        return [
            {**item.model_dump(), "remaining": item.allocated - item.spent}
            for item in await self.items.list_all()
        ]

    async def get_stats(self, principal_id: Optional[str]) -> Dict[str, Any]:
        await self.identity.require_member(principal_id)
        items = await self.items.list_all()
        allocated = sum(item.allocated for item in items)
        spent = sum(item.spent for item in items)
        return {
            "total_allocated": allocated,
            "total_spent": spent,
            "total_remaining": allocated - spent,
            "spent_percentage": (spent / allocated * 100) if allocated > 0 else 0,
        }

    async def list_expenses(self, principal_id: Optional[str], limit: Optional[int] = None) -> List[Expense]:
        await self.identity.require_member(principal_id)
        return await self.expenses.recent(limit or settings.EXPENSES_DEFAULT_LIMIT)

    async def create_expense(self, principal_id: Optional[str], fields: Dict[str, Any]) -> Expense:
        member = await self._require_writer(principal_id)
        expense = Expense(**fields, created_at=utc_now())
        await self.expenses.create(expense)

        if expense.status == ExpenseStatus.APPROVED.value:
            if not await self.items.add_spent(expense.category, expense.amount):
                logger.warning(f"Approved expense {expense.id} has no budget category {expense.category!r}")

        logger.info(f"Member {member.id} recorded expense {expense.id} ({expense.status})")
        return expense

    async def create_category(self, principal_id: Optional[str], category: str, allocated: float) -> BudgetItem:
        member = await self._require_writer(principal_id)
        duplicate = f"Budget category {category!r} already exists"
        if await self.items.find_one({"category": category}):
            raise ConflictError(duplicate)

        item = BudgetItem(category=category, allocated=allocated, spent=0)
        try:
            await self.items.create(item)
        except DuplicateKeyError:
            raise ConflictError(duplicate)
        logger.info(f"Member {member.id} created budget category {item.id}")
        return item
