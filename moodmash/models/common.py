# shared model helpers — pagination envelope and timestamp normalization

import math
from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """treat naive timestamps as utc so they compare with aware ones"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Page(BaseModel, Generic[T]):
    """one page of a user-scoped listing"""
    data: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = Field(0, alias="totalPages")
    has_more: bool = Field(False, alias="hasMore")

    model_config = {"populate_by_name": True}

    @classmethod
    def build(cls, items: list, total: int, page: int, limit: int) -> "Page":
        return cls(
            data=items,
            total=total,
            page=page,
            limit=limit,
            totalPages=math.ceil(total / limit) if limit else 0,
            hasMore=page * limit < total,
        )


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1, max_length=100)


class BulkDeleteResponse(BaseModel):
    deleted: int
