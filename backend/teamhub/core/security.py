from datetime import timedelta
from typing import Any, Dict, Optional, Union

from jose import JWTError, jwt

from teamhub.core.clock import utc_now
from teamhub.core.config import settings
from teamhub.core.constants import (
    TOKEN_TYPE_ACCESS,
    TOKEN_TYPE_DOWNLOAD,
    TOKEN_TYPE_UPLOAD,
)


def _encode(claims: Dict[str, Any], expires_delta: timedelta) -> str:
    now = utc_now()
    to_encode = {**claims, "iat": now, "exp": now + expires_delta}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _decode(token: str, expected_type: str) -> Optional[Dict[str, Any]]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != expected_type:
        return None
    return payload


def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Issue a principal token.

    Production tokens come from the identity provider; this exists for
    local development and tests, signed with the same key.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode({"sub": str(subject), "type": TOKEN_TYPE_ACCESS}, expires_delta)


def decode_access_token(token: str) -> Optional[str]:
    """Return the principal id carried by ``token``, or None when invalid."""
    payload = _decode(token, TOKEN_TYPE_ACCESS)
    if not payload:
        return None
    return payload.get("sub")


def create_upload_token(member_id: str) -> str:
    return _encode(
        {"sub": member_id, "type": TOKEN_TYPE_UPLOAD},
        timedelta(minutes=settings.UPLOAD_URL_EXPIRE_MINUTES),
    )


def verify_upload_token(token: str) -> Optional[str]:
    """Return the member id the upload slot was issued to."""
    payload = _decode(token, TOKEN_TYPE_UPLOAD)
    if not payload:
        return None
    return payload.get("sub")


def create_download_token(storage_id: str) -> str:
    return _encode(
        {"sid": storage_id, "type": TOKEN_TYPE_DOWNLOAD},
        timedelta(minutes=settings.DOWNLOAD_URL_EXPIRE_MINUTES),
    )


def verify_download_token(token: str) -> Optional[str]:
    """Return the storage id a signed download URL points at."""
    payload = _decode(token, TOKEN_TYPE_DOWNLOAD)
    if not payload:
        return None
    return payload.get("sid")
