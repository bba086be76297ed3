"""
Open Library book search adapter.

Open Library is anonymous, so no key is needed. Pagination is forwarded as
``limit``/``offset``; every document is mapped into a ``BookResult`` with
absent list fields defaulting to empty lists.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.exceptions import UpstreamError
from app.models.search_response import BookResult
from catalogs._http import get_json

logger = logging.getLogger(__name__)

SEARCH_URL = "https://openlibrary.org/search.json"
COVER_URL_TEMPLATE = "https://covers.openlibrary.org/b/id/{cover_id}-M.jpg"


def cover_url(cover_id: Optional[int]) -> Optional[str]:
    """Construct a cover URL from a numeric cover id."""
    if not cover_id:
        return None
    return COVER_URL_TEMPLATE.format(cover_id=cover_id)


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def to_book_result(doc: Dict[str, Any]) -> BookResult:
    return BookResult(
        key=doc.get("key") or "",
        title=doc.get("title") or "",
        authors=_str_list(doc.get("author_name")),
        publish_year=doc.get("first_publish_year") or None,
        cover_url=cover_url(doc.get("cover_i")),
        isbn=_str_list(doc.get("isbn")),
        subjects=_str_list(doc.get("subject")),
    )


async def search_books(
        client: httpx.AsyncClient,
        query: str,
        page: int = 1,
        limit: int = 20,
) -> List[BookResult]:
    offset = (page - 1) * limit
    params = {"q": query, "limit": limit, "offset": offset}
    data = await get_json(client, SEARCH_URL, params, catalog="OpenLibrary")

    try:
        books = [to_book_result(doc) for doc in data.get("docs") or []]
    except (TypeError, ValueError) as e:
        raise UpstreamError("OpenLibrary API returned a malformed document") from e
    logger.debug("OpenLibrary returned %d books for %r (offset %d)", len(books), query, offset)
    return books
