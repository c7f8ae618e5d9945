"""
Router whose responses are keyed by field name.

Models carry ``serialization_alias="_id"`` so that ``model_dump(by_alias=True)``
produces MongoDB documents. Over HTTP the same models must come out as
``id``, so every route registered on ``TeamHubRouter`` renders responses
with ``response_model_by_alias=False`` whatever the decorator says.
"""

from typing import Any

from fastapi import APIRouter
from fastapi.routing import APIRoute


class FieldNameRoute(APIRoute):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["response_model_by_alias"] = False
        super().__init__(*args, **kwargs)


class TeamHubRouter(APIRouter):
    """``APIRouter`` that registers ``FieldNameRoute`` unless told otherwise."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("route_class", FieldNameRoute)
        super().__init__(*args, **kwargs)
