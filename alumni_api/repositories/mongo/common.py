"""Query helpers shared by the Motor repositories."""

import re
from typing import Any, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING

from alumni_api.core.pagination import PaginationParams

ACTIVE = {"deleted_at": None}
TRASHED = {"deleted_at": {"$ne": None}}


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Return an ObjectId, or None when the string is not one."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def search_filter(search: str, fields: Sequence[str]) -> dict[str, Any]:
    """Case-insensitive substring match on any of ``fields``."""
    if not search or not fields:
        return {}
    pattern = {"$regex": re.escape(search), "$options": "i"}
    return {"$or": [{field: pattern} for field in fields]}


async def fetch_page(
    collection,
    query: dict[str, Any],
    params: PaginationParams,
    sort_fields: frozenset[str],
    search_fields: Sequence[str],
    sort: Optional[list[tuple[str, int]]] = None,
) -> tuple[list[dict[str, Any]], int]:
    """Run a filtered, sorted and paginated find plus its count."""
    query = {**query, **search_filter(params.search, search_fields)}
    total = await collection.count_documents(query)

    if sort is None:
        direction = DESCENDING if params.descending else ASCENDING
        sort = [(params.resolve_sort(sort_fields), direction)]
    cursor = (
        collection.find(query)
        .sort(sort + [("_id", ASCENDING)])
        .skip(params.offset)
        .limit(params.page_size)
    )
    documents = await cursor.to_list(length=params.page_size)
    return documents, total
