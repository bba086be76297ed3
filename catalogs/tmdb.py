"""
TMDB movie search adapter.

Translates a query into one call to TMDB's ``/search/movie`` endpoint and
maps the upstream items into ``MovieResult`` records.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.exceptions import ConfigurationError, UpstreamError
from app.models.search_response import MovieResult
from catalogs._http import get_json

logger = logging.getLogger(__name__)

SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"


def poster_url(poster_path: Optional[str]) -> Optional[str]:
    if not poster_path:
        return None
    return f"{POSTER_BASE_URL}{poster_path}"


def to_movie_result(item: Dict[str, Any]) -> MovieResult:
    # genre_ids has no place in the unified schema
    return MovieResult(
        id=int(item["id"]),
        title=item.get("title") or "",
        overview=item.get("overview") or "",
        release_date=item.get("release_date") or "",
        poster_url=poster_url(item.get("poster_path")),
        rating=float(item.get("vote_average") or 0.0),
    )


async def search_movies(
        client: httpx.AsyncClient,
        query: str,
        page: int = 1,
        api_key: Optional[str] = None,
) -> List[MovieResult]:
    if not api_key:
        raise ConfigurationError("TMDB API key is required")

    params = {"api_key": api_key, "query": query, "page": page}
    data = await get_json(client, SEARCH_URL, params, catalog="TMDB")

    try:
        movies = [to_movie_result(item) for item in data.get("results") or []]
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamError("TMDB API returned a malformed movie item") from e
    logger.debug("TMDB returned %d movies for %r (page %d)", len(movies), query, page)
    return movies
