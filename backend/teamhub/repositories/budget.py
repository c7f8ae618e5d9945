"""
Budget Repositories
"""

from typing import List

from teamhub.models.budget import BudgetItem, Expense
from teamhub.repositories.base import BaseRepository


class BudgetItemRepository(BaseRepository[BudgetItem]):
    collection_name = "budget_items"
    model_class = BudgetItem

    async def list_all(self) -> List[BudgetItem]:
        return await self.find_many({}, sort="category")

    async def add_spent(self, category: str, amount: float) -> bool:
        """Atomically add ``amount`` to the category's spent total."""
        result = await self.collection.update_one({"category": category}, {"$inc": {"spent": amount}})
        return result.modified_count > 0


class ExpenseRepository(BaseRepository[Expense]):
    collection_name = "expenses"
    model_class = Expense

    async def recent(self, limit: int) -> List[Expense]:
        return await self.find_many({}, sort="created_at", sort_order=-1, limit=limit)
