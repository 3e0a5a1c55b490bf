"""Zero-based page parameters and the paginated response envelope."""

from math import ceil
from typing import Generic, List, TypeVar

from fastapi import Query
from pydantic import BaseModel

from .config import settings

T = TypeVar("T")


class PageParams(BaseModel):
    page: int = 0
    size: int = settings.default_page_size

    @property
    def offset(self) -> int:
        return self.page * self.size


def page_params(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size,
        description="Items per page",
    ),
) -> PageParams:
    return PageParams(page=page, size=size)


class PaginatedResponse(BaseModel, Generic[T]):
    """Base schema for paginated responses"""

    items: List[T]
    total: int
    page: int
    size: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, items: List[T], total: int, params: PageParams):
        total_pages = ceil(total / params.size) if params.size else 0
        # items may be ORM rows; read them by attribute
        return cls.model_validate(
            {
                "items": items,
                "total": total,
                "page": params.page,
                "size": params.size,
                "total_pages": total_pages,
                "has_next": params.page + 1 < total_pages,
                "has_prev": params.page > 0,
            },
            from_attributes=True,
        )
