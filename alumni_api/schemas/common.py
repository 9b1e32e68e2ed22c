"""Schemas shared by several endpoints."""

from pydantic import BaseModel

from alumni_api.core.pagination import PaginationParams


class PaginatedResponse(BaseModel):
    """Paging fields returned with every list. Subclasses add ``items``."""

    total: int
    page: int
    page_size: int
    pages: int
    sort_by: str
    order: str
    search: str = ""

    @classmethod
    def build(cls, items: list, total: int, params: PaginationParams, sort_by: str):
        return cls(
            items=items,
            total=total,
            page=params.page,
            page_size=params.page_size,
            pages=params.total_pages(total),
            sort_by=sort_by,
            order=params.order,
            search=params.search,
        )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
