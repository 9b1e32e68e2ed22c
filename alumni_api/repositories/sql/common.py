"""Query helpers shared by the SQLAlchemy repositories."""

from typing import Any, Optional, Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from alumni_api.core.pagination import PaginationParams


async def fetch_page(
    db: AsyncSession,
    query: Select,
    model: Any,
    params: PaginationParams,
    sort_fields: frozenset[str],
    search_fields: Sequence[str],
    ordering: Optional[Any] = None,
) -> tuple[list[Any], int]:
    """Apply search, count, sort and offset/limit to ``query``.

    ``ordering`` replaces the requested sort column, e.g. trash listings
    are always newest deletion first.
    """
    if params.search and search_fields:
        query = query.where(
            or_(
                *(
                    getattr(model, field).icontains(params.search, autoescape=True)
                    for field in search_fields
                )
            )
        )

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar() or 0

    if ordering is None:
        column = getattr(model, params.resolve_sort(sort_fields))
        ordering = column.desc() if params.descending else column.asc()
    query = query.order_by(ordering, model.id).offset(params.offset).limit(params.page_size)

    result = await db.execute(query)
    return list(result.scalars().all()), total
