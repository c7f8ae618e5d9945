"""Partial-update helpers.

Patch payloads carry every field as optional. Only fields the caller
actually set are applied; omitted fields keep their stored value.
"""

from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel


def strip_unset(patch: Union[BaseModel, Mapping[str, Any], None]) -> Dict[str, Any]:
    """Return only the fields that were set to a value."""
    if patch is None:
        return {}
    if isinstance(patch, BaseModel):
        data = patch.model_dump(exclude_unset=True)
    else:
        data = dict(patch)
    return {key: value for key, value in data.items() if value is not None}


def is_noop(changes: Mapping[str, Any]) -> bool:
    return not changes


def diff_against(changes: Mapping[str, Any], current: BaseModel) -> Dict[str, Any]:
    """Drop entries that would not change ``current``."""
    return {key: value for key, value in changes.items() if getattr(current, key, None) != value}
