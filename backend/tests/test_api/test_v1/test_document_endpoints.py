"""Tests for document endpoints."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from teamhub.api.v1.endpoints.documents import (
    add_document_version,
    create_document,
    generate_upload_url,
    update_document_metadata,
)
from teamhub.schemas.document import DocumentCreate, DocumentMetadataUpdate, DocumentVersionCreate


def _service():
    service = MagicMock()
    service.generate_upload_url = AsyncMock(return_value="http://testserver/api/v1/storage/upload/tok")
    service.create_from_upload = AsyncMock(return_value="doc-1")
    service.add_version = AsyncMock()
    service.update_metadata = AsyncMock()
    return service


class TestUploadFlow:
    def test_upload_url(self):
        result = asyncio.run(generate_upload_url(principal_id="principal-bob", service=_service()))
        assert result == {"upload_url": "http://testserver/api/v1/storage/upload/tok"}

    def test_register_upload(self):
        service = _service()
        document_in = DocumentCreate(
            file_name="plan.pdf", mime_type="application/pdf", size=10, storage_id="65f000000000000000000001"
        )

        result = asyncio.run(create_document(document_in=document_in, principal_id="principal-bob", service=service))

        assert result == {"document_id": "doc-1"}
        fields = service.create_from_upload.call_args.args[1]
        assert fields["title"] is None
        assert fields["storage_id"] == "65f000000000000000000001"


class TestVersions:
    def test_document_id_comes_from_path(self):
        service = _service()
        version_in = DocumentVersionCreate(storage_id="65f000000000000000000002", mime_type="application/pdf", size=5)

        asyncio.run(
            add_document_version(
                document_id="doc-1", version_in=version_in, principal_id="principal-bob", service=service
            )
        )

        fields = service.add_version.call_args.args[1]
        assert fields["document_id"] == "doc-1"
        assert fields["file_name"] is None


class TestMetadata:
    def test_only_sent_fields_are_forwarded(self):
        service = _service()
        asyncio.run(
            update_document_metadata(
                document_id="doc-1",
                metadata_in=DocumentMetadataUpdate(tags=["hr"]),
                principal_id="principal-bob",
                service=service,
            )
        )
        service.update_metadata.assert_called_once_with("principal-bob", "doc-1", {"tags": ["hr"]})
