from typing import Annotated, Any

from bson import ObjectId
from pydantic import BeforeValidator


def _stringify_object_id(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


# Our collections use uuid4 strings; GridFS file ids arrive as ObjectId.
PyObjectId = Annotated[str, BeforeValidator(_stringify_object_id)]
