import asyncio
import logging
from typing import Awaitable, List, Optional, Sequence

import httpx

from app.core.config import Settings
from app.core.exceptions import ConfigurationError, UpstreamError
from app.models.search_query import SearchQuery
from app.models.search_response import SearchResponse
from catalogs.openlibrary import search_books
from catalogs.tmdb import search_movies

logger = logging.getLogger(__name__)

# Failures a single catalog branch may contribute nothing for
_ISOLATED_ERRORS = (ConfigurationError, UpstreamError)


async def _isolated(branch: str, call: Awaitable[Sequence]) -> List:
    """
    Await one catalog call and turn its configuration/upstream failure into
    an empty contribution, so the combined search never fails on it.
    """
    try:
        return list(await call)
    except _ISOLATED_ERRORS as e:
        logger.warning("%s search error: %s", branch, e.message)
        return []


class CatalogService:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(self.settings.upstream_timeout)
        return httpx.AsyncClient(timeout=timeout, transport=self.transport)

    async def search(self, query: SearchQuery) -> SearchResponse:
        """
        Combined search. Both selected catalogs are queried concurrently and
        joined; movies come first, then books, with no re-ranking.
        """
        async with self._client() as client:
            movie_call = book_call = None
            if query.wants_movies:
                movie_call = _isolated(
                    "Movie",
                    search_movies(client, query.q, query.page, self.settings.tmdb_api_key),
                )
            if query.wants_books:
                book_call = _isolated(
                    "Book",
                    search_books(client, query.q, query.page, query.limit),
                )

            calls = [c for c in (movie_call, book_call) if c is not None]
            # Every branch settles before anything is re-raised
            contributions = await asyncio.gather(*calls, return_exceptions=True)

        for contribution in contributions:
            if isinstance(contribution, BaseException):
                raise contribution

        results = [item for contribution in contributions for item in contribution]
        return SearchResponse(results=results, page=query.page)

    async def search_movies(self, query: SearchQuery) -> SearchResponse:
        async with self._client() as client:
            movies = await search_movies(client, query.q, query.page, self.settings.tmdb_api_key)
        return SearchResponse(results=movies, page=query.page)

    async def search_books(self, query: SearchQuery) -> SearchResponse:
        async with self._client() as client:
            books = await search_books(client, query.q, query.page, query.limit)
        return SearchResponse(results=books, page=query.page)
