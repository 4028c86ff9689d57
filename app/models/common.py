"""
Shared pydantic helpers: camelCase wire format, pagination block and the
`{success, message, data}` response envelope used by every endpoint.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model read from ORM objects and written in camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class RequestModel(BaseModel):
    """Request body accepting camelCase keys and rejecting unknown ones."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class Pagination(CamelModel):
    total: int
    limit: int
    offset: int
    has_more: bool

    @classmethod
    def build(cls, total: int, limit: int, offset: int, returned: int) -> "Pagination":
        return cls(total=total, limit=limit, offset=offset, has_more=total > offset + returned)


def dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def api_response(data: Optional[Dict[str, Any]] = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
