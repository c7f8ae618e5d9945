"""Tests for principal tokens and signed storage tokens."""

from datetime import timedelta

from jose import jwt

from teamhub.core.config import settings
from teamhub.core.security import (
    create_access_token,
    create_download_token,
    create_upload_token,
    decode_access_token,
    verify_download_token,
    verify_upload_token,
)


class TestAccessToken:
    def test_round_trip_subject(self):
        token = create_access_token("principal-1")
        assert decode_access_token(token) == "principal-1"

    def test_contains_type_and_expiry(self):
        token = create_access_token("principal-1")
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = create_access_token("principal-1", expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_garbage_rejected(self):
        assert decode_access_token("not-a-jwt") is None

    def test_wrong_key_rejected(self):
        token = jwt.encode({"sub": "p", "type": "access"}, "other-key", algorithm="HS256")
        assert decode_access_token(token) is None


class TestStorageTokens:
    def test_upload_token_carries_member(self):
        assert verify_upload_token(create_upload_token("member-1")) == "member-1"

    def test_download_token_carries_storage_id(self):
        assert verify_download_token(create_download_token("blob-1")) == "blob-1"

    def test_token_types_not_interchangeable(self):
        upload = create_upload_token("member-1")
        download = create_download_token("blob-1")
        assert verify_download_token(upload) is None
        assert verify_upload_token(download) is None
        assert decode_access_token(upload) is None

    def test_access_token_cannot_download(self):
        assert verify_download_token(create_access_token("principal-1")) is None
