"""Pagination, sorting and search parameters shared by list endpoints."""

from dataclasses import dataclass
from math import ceil
from typing import Optional

from fastapi import Query

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_SORT = "created_at"


@dataclass
class PaginationParams:
    """Normalized list parameters.

    Out of range values are clamped instead of rejected: a page below 1
    becomes 1 and a page size outside 1..100 becomes 10. Any order other
    than ``asc`` is treated as ``desc``.
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str = DEFAULT_SORT
    order: str = "desc"
    search: str = ""

    def __post_init__(self) -> None:
        if self.page < 1:
            self.page = 1
        if self.page_size < 1 or self.page_size > MAX_PAGE_SIZE:
            self.page_size = DEFAULT_PAGE_SIZE
        self.order = (self.order or "").lower()
        if self.order not in ("asc", "desc"):
            self.order = "desc"
        self.sort_by = self.sort_by or DEFAULT_SORT
        self.search = (self.search or "").strip()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def descending(self) -> bool:
        return self.order == "desc"

    def resolve_sort(self, allowed: set[str] | frozenset[str]) -> str:
        """Return the requested sort column if whitelisted, else created_at."""
        if self.sort_by in allowed:
            return self.sort_by
        return DEFAULT_SORT

    def total_pages(self, total: int) -> int:
        if total <= 0:
            return 0
        return ceil(total / self.page_size)


def pagination_params(
    page: int = Query(1, description="Page number, values below 1 become 1"),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE,
        alias="limit",
        description="Items per page (1-100, otherwise 10)",
    ),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
) -> PaginationParams:
    """FastAPI dependency building PaginationParams from the query string."""
    return PaginationParams(
        page=page,
        page_size=page_size,
        sort_by=sort_by or DEFAULT_SORT,
        order=order or "desc",
        search=search or "",
    )
