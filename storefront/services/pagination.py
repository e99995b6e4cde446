"""
Page math and link construction for the product listing.

Everything here is pure: no database, no request objects, so the envelope
can be checked directly against ``(total, limit, page)`` triples.
"""
import math
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from pymongo import ASCENDING, DESCENDING

PRODUCTS_PATH = "/api/products"


def build_product_filter(query: Optional[str]) -> Dict[str, Any]:
    """Match ``query`` against category OR availability; no query, no filter."""
    if not query:
        return {}
    return {"$or": [{"category": query}, {"availability": query}]}


def sort_direction(sort: Optional[str]) -> int:
    """Price sort direction; anything but ``"desc"`` sorts ascending."""
    return DESCENDING if sort == "desc" else ASCENDING


def page_skip(limit: int, page: int) -> int:
    return (page - 1) * limit


def page_link(limit: int, page: int, sort: Optional[str] = None, query: Optional[str] = None,
              path: str = PRODUCTS_PATH) -> str:
    """
    Build a listing link for ``page`` carrying the caller's other parameters.
    Parameters the caller did not send are left out rather than rendered empty.
    """
    params: Dict[str, Any] = {"limit": limit, "page": page}
    if sort is not None:
        params["sort"] = sort
    if query is not None:
        params["query"] = query
    return f"{path}?{urlencode(params)}"


def build_page_envelope(
    total: int,
    limit: int,
    page: int,
    sort: Optional[str] = None,
    query: Optional[str] = None,
    payload: Optional[List[Any]] = None,
    path: str = PRODUCTS_PATH,
) -> Dict[str, Any]:
    """
    Build the listing envelope for one page.

    Args:
        total: Number of documents matching the filter
        limit: Page size, at least 1
        page: Requested page, at least 1 (may be past the last page)
        sort: Sort parameter as sent by the caller, echoed into links
        query: Filter parameter as sent by the caller, echoed into links
        payload: Documents on this page
        path: Base path for prev/next links

    Returns:
        Envelope dict keyed the way the API returns it (camelCase)

    Raises:
        ValueError: If limit or page is below 1 or total is negative
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if page < 1:
        raise ValueError("page must be at least 1")
    if total < 0:
        raise ValueError("total must not be negative")

    total_pages = math.ceil(total / limit)
    has_prev_page = page > 1
    has_next_page = page < total_pages
    prev_page = page - 1 if has_prev_page else None
    next_page = page + 1 if has_next_page else None

    return {
        "status": "success",
        "payload": payload if payload is not None else [],
        "totalPages": total_pages,
        "prevPage": prev_page,
        "nextPage": next_page,
        "page": page,
        "hasPrevPage": has_prev_page,
        "hasNextPage": has_next_page,
        "prevLink": page_link(limit, prev_page, sort, query, path) if has_prev_page else None,
        "nextLink": page_link(limit, next_page, sort, query, path) if has_next_page else None,
    }
