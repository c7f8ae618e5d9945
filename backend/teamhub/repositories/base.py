"""
Base Repository Pattern

Generic base class shared by the collection repositories. Subclasses
name their collection and model; queries stay in the subclasses so
each lookup path is visible next to the index that serves it.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo import ReturnDocument

T = TypeVar("T", bound=BaseModel)

SortSpec = Union[str, Sequence[Tuple[str, int]]]


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.

    Usage:
        class TaskRepository(BaseRepository[Task]):
            collection_name = "tasks"
            model_class = Task
    """

    collection_name: str
    model_class: Type[T]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _to_model(self, data: Optional[Dict[str, Any]]) -> Optional[T]:
        if data is None:
            return None
        return self.model_class(**data)

    def _to_model_list(self, docs: List[Dict[str, Any]]) -> List[T]:
        return [self.model_class(**doc) for doc in docs]

    async def get_by_id(self, id: str) -> Optional[T]:
        data = await self.collection.find_one({"_id": id})
        return self._to_model(data)

    async def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        data = await self.collection.find_one(query)
        return self._to_model(data)

    async def find_many(
        self,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        sort_order: int = 1,
        limit: Optional[int] = None,
    ) -> List[T]:
        """Find documents; ``sort`` is a field name or a list of (field, direction)."""
        cursor = self.collection.find(query)
        if isinstance(sort, str):
            cursor = cursor.sort(sort, sort_order)
        elif sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(limit)
        return self._to_model_list(docs)

    async def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        return await self.collection.count_documents(query or {})

    async def create(self, model: T) -> T:
        await self.collection.insert_one(model.model_dump(by_alias=True))
        return model

    async def update(self, id: str, update_data: Dict[str, Any]) -> Optional[T]:
        """$set ``update_data`` and return the updated model."""
        if update_data:
            await self.collection.update_one({"_id": id}, {"$set": update_data})
        return await self.get_by_id(id)

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update_ops: Dict[str, Any],
        upsert: bool = False,
    ) -> Optional[T]:
        """Atomically apply ``update_ops`` to the first match; returns the new state."""
        data = await self.collection.find_one_and_update(
            query,
            update_ops,
            upsert=upsert,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_model(data)

    async def delete(self, id: str) -> bool:
        result = await self.collection.delete_one({"_id": id})
        return result.deleted_count > 0

    async def delete_many(self, query: Dict[str, Any]) -> int:
        result = await self.collection.delete_many(query)
        return result.deleted_count

    async def aggregate(self, pipeline: List[Dict[str, Any]], limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self.collection.aggregate(pipeline).to_list(limit)
