"""
Document and Document Version Repositories

A document row carries a copy of its newest version's file fields.
``advance_version`` bumps ``current_version`` and rewrites that copy in
one update, so the returned number is reserved for the caller.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from teamhub.models.document import Document, DocumentVersion
from teamhub.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    collection_name = "documents"
    model_class = Document

    async def list_by_updated(self) -> List[Document]:
        return await self.find_many({}, sort="updated_at", sort_order=-1)

    async def advance_version(
        self,
        document_id: str,
        current_fields: Dict[str, Any],
        now: datetime,
    ) -> Optional[Document]:
        return await self.find_one_and_update(
            {"_id": document_id},
            {
                "$inc": {"current_version": 1},
                "$set": {**current_fields, "updated_at": now},
            },
        )

    async def rewind_version(self, document_id: str, version: int, previous_fields: Dict[str, Any]) -> bool:
        """Step back from ``version`` if nothing newer was added since."""
        result = await self.collection.update_one(
            {"_id": document_id, "current_version": version},
            {"$set": {**previous_fields, "current_version": version - 1}},
        )
        return result.modified_count > 0


class DocumentVersionRepository(BaseRepository[DocumentVersion]):
    collection_name = "document_versions"
    model_class = DocumentVersion

    async def list_for_document(self, document_id: str) -> List[DocumentVersion]:
        """Newest first."""
        return await self.find_many({"document_id": document_id}, sort="version", sort_order=-1)

    async def count_for_documents(self, document_ids: List[str]) -> Dict[str, int]:
        if not document_ids:
            return {}
        rows = await self.aggregate(
            [
                {"$match": {"document_id": {"$in": document_ids}}},
                {"$group": {"_id": "$document_id", "count": {"$sum": 1}}},
            ]
        )
        return {row["_id"]: row["count"] for row in rows}

    async def delete_for_document(self, document_id: str) -> int:
        return await self.delete_many({"document_id": document_id})
