"""
Document Versioning

Documents are uploaded in two steps: the client asks for an upload URL,
sends the bytes to blob storage, then registers the returned storage id
here. Every upload, including the first, becomes an immutable
DocumentVersion; the Document row mirrors the newest one.

Deleting a document removes its blobs first and its metadata last, so
a crash part way leaves orphaned blobs rather than rows pointing at
blobs that no longer exist.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from teamhub.core.clock import utc_now
from teamhub.core.constants import UNKNOWN_MEMBER_NAME
from teamhub.core.exceptions import InvalidInputError, NotFoundError, PermissionDeniedError
from teamhub.core.metrics import documents_versions_total
from teamhub.core.permissions import can_delete_document, can_edit_document
from teamhub.models.document import Document, DocumentFileType, DocumentVersion
from teamhub.models.member import TeamMember
from teamhub.repositories.documents import DocumentRepository, DocumentVersionRepository
from teamhub.repositories.members import MemberRepository
from teamhub.services.identity import IdentityService
from teamhub.services.storage import BlobStorage

logger = logging.getLogger(__name__)

READ_ONLY_DETAIL = "Read-only access. Ask an admin to grant edit access."
DELETE_DENIED_DETAIL = "Only admins or document owners can delete documents."
MISSING_UPLOAD_DETAIL = "Uploaded file was not found in storage."


def classify_file_type(file_name: str, mime_type: str) -> str:
    """Extension first, then MIME type, else ``other``."""
    lower_name = file_name.lower()
    extension = lower_name.rsplit(".", 1)[-1] if "." in lower_name else ""
    mime = (mime_type or "").lower()

    if extension == "pdf" or "pdf" in mime:
        return DocumentFileType.PDF.value
    if extension in ("md", "markdown") or mime == "text/markdown":
        return DocumentFileType.MARKDOWN.value
    if extension == "jsonl" or mime in ("application/x-ndjson", "application/jsonl"):
        return DocumentFileType.JSONL.value
    return DocumentFileType.OTHER.value


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    return [tag for tag in tags if tag.strip()]


def _current_fields(document: Document) -> Dict[str, Any]:
    return {
        "file_name": document.file_name,
        "file_type": document.file_type,
        "mime_type": document.mime_type,
        "size": document.size,
        "storage_id": document.storage_id,
        "updated_at": document.updated_at,
    }


class DocumentService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.documents = DocumentRepository(db)
        self.versions = DocumentVersionRepository(db)
        self.members = MemberRepository(db)
        self.identity = IdentityService(db)
        self.storage = BlobStorage(db)

    async def _require_editor(self, principal_id: Optional[str]) -> TeamMember:
        member = await self.identity.require_member(principal_id)
        if not can_edit_document(member):
            logger.warning(f"Viewer {member.id} attempted a document write")
            raise PermissionDeniedError(READ_ONLY_DETAIL)
        return member

    async def _require_document(self, document_id: str) -> Document:
        document = await self.documents.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document")
        return document

    async def _require_blob(self, storage_id: str) -> None:
        if not await self.storage.exists(storage_id):
            raise InvalidInputError(MISSING_UPLOAD_DETAIL, field="storage_id")

    # -- uploads -------------------------------------------------------------

    async def generate_upload_url(self, principal_id: Optional[str]) -> str:
        member = await self._require_editor(principal_id)
        return self.storage.generate_upload_url(member.id)

    async def create_from_upload(self, principal_id: Optional[str], fields: Dict[str, Any]) -> str:
        """Register an uploaded blob as version 1 of a new document; returns the document id."""
        member = await self._require_editor(principal_id)
        await self._require_blob(fields["storage_id"])

        now = utc_now()
        file_name = fields["file_name"]
        document = Document(
            title=_clean_text(fields.get("title")) or file_name,
            file_name=file_name,
            description=_clean_text(fields.get("description")),
            tags=_clean_tags(fields.get("tags")),
            file_type=classify_file_type(file_name, fields["mime_type"]),
            mime_type=fields["mime_type"],
            size=fields["size"],
            storage_id=fields["storage_id"],
            created_by=member.id,
            current_version=1,
            created_at=now,
            updated_at=now,
        )
        await self.documents.create(document)
        try:
            await self.versions.create(
                DocumentVersion(
                    document_id=document.id,
                    version=1,
                    storage_id=document.storage_id,
                    file_name=document.file_name,
                    mime_type=document.mime_type,
                    size=document.size,
                    uploaded_by=member.id,
                    created_at=now,
                )
            )
        except PyMongoError:
            logger.exception(f"Failed to record first version of document {document.id}; removing it")
            await self.documents.delete(document.id)
            raise
        documents_versions_total.inc()
        logger.info(f"Member {member.id} created document {document.id}")
        return document.id

    async def add_version(self, principal_id: Optional[str], fields: Dict[str, Any]) -> DocumentVersion:
        member = await self._require_editor(principal_id)
        document = await self._require_document(fields["document_id"])
        await self._require_blob(fields["storage_id"])

        now = utc_now()
        file_name = fields.get("file_name") or document.file_name
        current = {
            "file_name": file_name,
            "file_type": classify_file_type(file_name, fields["mime_type"]),
            "mime_type": fields["mime_type"],
            "size": fields["size"],
            "storage_id": fields["storage_id"],
        }

        # Bumping current_version reserves the new number for this call.
        advanced = await self.documents.advance_version(document.id, current, now)
        if advanced is None:
            raise NotFoundError("Document")

        version = DocumentVersion(
            document_id=document.id,
            version=advanced.current_version,
            storage_id=fields["storage_id"],
            file_name=file_name,
            mime_type=fields["mime_type"],
            size=fields["size"],
            uploaded_by=member.id,
            change_note=_clean_text(fields.get("change_note")),
            created_at=now,
        )
        try:
            await self.versions.create(version)
        except PyMongoError:
            logger.exception(f"Failed to record version {version.version} of document {document.id}")
            await self.documents.rewind_version(document.id, version.version, _current_fields(document))
            raise

        documents_versions_total.inc()
        logger.info(f"Member {member.id} added version {version.version} to document {document.id}")
        return version

    # -- reads ---------------------------------------------------------------

    async def list(self, principal_id: Optional[str], search: Optional[str] = None) -> List[Dict[str, Any]]:
        """Documents newest first, with creator info and the caller's edit/delete rights."""
        member = await self.identity.resolve_member(principal_id)
        if member is None:
            return []

        documents = await self.documents.list_by_updated()
        term = (search or "").strip().lower()
        if term:
            documents = [d for d in documents if term in self._search_text(d)]

        creators = {m.id: m for m in await self.members.get_many([d.created_by for d in documents])}
        counts = await self.versions.count_for_documents([d.id for d in documents])

        result = []
        for document in documents:
            creator = creators.get(document.created_by)
            item = document.model_dump()
            item.update(
                {
                    "creator_name": creator.name if creator else UNKNOWN_MEMBER_NAME,
                    "creator_email": creator.email if creator else None,
                    "version_count": counts.get(document.id, 0),
                    "can_edit": can_edit_document(member),
                    "can_delete": can_delete_document(member, document),
                }
            )
            result.append(item)
        return result

    @staticmethod
    def _search_text(document: Document) -> str:
        parts = [document.title, document.file_name, document.description or "", " ".join(document.tags or [])]
        return " ".join(parts).lower()

    async def list_versions(self, principal_id: Optional[str], document_id: str) -> List[Dict[str, Any]]:
        if await self.identity.resolve_member(principal_id) is None:
            return []

        versions = await self.versions.list_for_document(document_id)
        uploaders = {m.id: m for m in await self.members.get_many([v.uploaded_by for v in versions])}

        result = []
        for version in versions:
            uploader = uploaders.get(version.uploaded_by)
            item = version.model_dump()
            item["uploader_name"] = uploader.name if uploader else UNKNOWN_MEMBER_NAME
            result.append(item)
        return result

    async def get_download_url(
        self,
        principal_id: Optional[str],
        document_id: str,
        version_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        await self.identity.require_member(principal_id)
        document = await self._require_document(document_id)

        if version_id:
            version = await self.versions.get_by_id(version_id)
            if version is None or version.document_id != document.id:
                raise NotFoundError("Version")
            storage_id, file_name, mime_type, number = (
                version.storage_id,
                version.file_name,
                version.mime_type,
                version.version,
            )
        else:
            storage_id, file_name, mime_type, number = (
                document.storage_id,
                document.file_name,
                document.mime_type,
                document.current_version,
            )

        return {
            "url": self.storage.get_url(storage_id),
            "file_name": file_name,
            "mime_type": mime_type,
            "version": number,
        }

    # -- metadata and deletion -----------------------------------------------

    async def update_metadata(self, principal_id: Optional[str], document_id: str, patch: Dict[str, Any]) -> Document:
        """Edit title, description and tags. A blank title keeps the old one."""
        member = await self._require_editor(principal_id)
        document = await self._require_document(document_id)

        updates: Dict[str, Any] = {}
        unset: List[str] = []
        if patch.get("title") is not None:
            updates["title"] = _clean_text(patch["title"]) or document.title
        if patch.get("description") is not None:
            description = _clean_text(patch["description"])
            if description:
                updates["description"] = description
            else:
                unset.append("description")
        if patch.get("tags") is not None:
            updates["tags"] = _clean_tags(patch["tags"])
        updates["updated_at"] = utc_now()

        update_ops: Dict[str, Any] = {"$set": updates}
        if unset:
            update_ops["$unset"] = {field: "" for field in unset}
        updated = await self.documents.find_one_and_update({"_id": document.id}, update_ops)
        if updated is None:
            raise NotFoundError("Document")

        logger.info(f"Member {member.id} updated metadata of document {document_id}")
        return updated

    async def remove(self, principal_id: Optional[str], document_id: str) -> None:
        member = await self.identity.require_member(principal_id)
        document = await self._require_document(document_id)
        if not can_delete_document(member, document):
            logger.warning(f"Member {member.id} denied delete of document {document_id}")
            raise PermissionDeniedError(DELETE_DENIED_DETAIL)

        versions = await self.versions.list_for_document(document.id)
        storage_ids = {document.storage_id}
        storage_ids.update(v.storage_id for v in versions)

        # A StorageError here aborts before any metadata is touched.
        for storage_id in sorted(storage_ids):
            await self.storage.delete(storage_id)

        await self.versions.delete_for_document(document.id)
        await self.documents.delete(document.id)
        logger.info(
            f"Member {member.id} deleted document {document_id} "
            f"({len(versions)} version(s), {len(storage_ids)} blob(s))"
        )
