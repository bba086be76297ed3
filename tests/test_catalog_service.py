import asyncio

import httpx
import pytest

from app.core.catalog_service import CatalogService
from app.core.config import Settings
from app.core.exceptions import ConfigurationError, UpstreamError
from app.models.search_query import SearchQuery

MOVIES = [
    {"id": 1, "title": "Dune", "overview": "Desert planet.", "release_date": "2021-09-15",
     "poster_path": "/dune.jpg", "vote_average": 7.8, "genre_ids": [878]},
    {"id": 2, "title": "Dune: Part Two", "overview": "", "release_date": "2024-02-27",
     "poster_path": None, "vote_average": 8.2, "genre_ids": []},
]

BOOKS = [
    {"key": "/works/OL893415W", "title": "Dune", "author_name": ["Frank Herbert"],
     "first_publish_year": 1965, "cover_i": 11481354},
]


def make_handler(tmdb_status=200, openlibrary_status=200):
    def handler(request):
        if request.url.host == "api.themoviedb.org":
            if tmdb_status != 200:
                return httpx.Response(tmdb_status)
            return httpx.Response(200, json={"results": MOVIES, "total_results": 2, "total_pages": 1})
        if request.url.host == "openlibrary.org":
            if openlibrary_status != 200:
                return httpx.Response(openlibrary_status)
            return httpx.Response(200, json={"docs": BOOKS, "numFound": 1, "start": 0})
        raise AssertionError(f"unexpected host {request.url.host}")
    return handler


def make_service(api_key="secret", **kwargs):
    transport = httpx.MockTransport(make_handler(**kwargs))
    return CatalogService(Settings(tmdb_api_key=api_key), transport=transport)


# ------------------------------------------------------
# Combined search (isolation policy)
# ------------------------------------------------------

def test_combined_search_movies_before_books():
    response = asyncio.run(make_service().search(SearchQuery(q="dune")))

    assert [r.source for r in response.results] == ["tmdb", "tmdb", "openlibrary"]
    assert response.total_results == 3
    assert response.page == 1
    assert response.total_pages is None

def test_combined_search_without_api_key_returns_books_only():
    response = asyncio.run(make_service(api_key=None).search(SearchQuery(q="dune")))

    assert [r.source for r in response.results] == ["openlibrary"]
    assert response.total_results == 1

def test_combined_search_book_upstream_failure_returns_movies_only():
    service = make_service(openlibrary_status=500)
    response = asyncio.run(service.search(SearchQuery(q="dune")))

    assert [r.source for r in response.results] == ["tmdb", "tmdb"]
    assert response.total_results == 2

def test_combined_search_both_failing_is_empty():
    service = make_service(api_key=None, openlibrary_status=502)
    response = asyncio.run(service.search(SearchQuery(q="dune")))

    assert response.results == []
    assert response.total_results == 0

def test_combined_search_logs_isolated_failure(caplog):
    service = make_service(tmdb_status=401)
    asyncio.run(service.search(SearchQuery(q="dune")))

    assert "Movie search error" in caplog.text

def test_combined_search_type_filter_books():
    response = asyncio.run(make_service().search(SearchQuery(q="dune", type="books")))
    assert all(r.source == "openlibrary" for r in response.results)

def test_combined_search_type_filter_movies():
    response = asyncio.run(make_service().search(SearchQuery(q="dune", type="movies")))
    assert all(r.source == "tmdb" for r in response.results)
    assert response.total_results == 2

def test_combined_search_unknown_type_selects_nothing():
    response = asyncio.run(make_service().search(SearchQuery(q="dune", type="tv")))
    assert response.results == []

def test_combined_search_unexpected_error_propagates():
    def handler(request):
        raise RuntimeError("boom")

    service = CatalogService(Settings(tmdb_api_key="secret"), transport=httpx.MockTransport(handler))
    with pytest.raises(RuntimeError):
        asyncio.run(service.search(SearchQuery(q="dune", type="books")))


# ------------------------------------------------------
# Single-catalog search (strict policy)
# ------------------------------------------------------

def test_strict_movie_search_without_key_raises():
    with pytest.raises(ConfigurationError):
        asyncio.run(make_service(api_key=None).search_movies(SearchQuery(q="dune")))

def test_strict_book_search_upstream_failure_raises():
    with pytest.raises(UpstreamError) as e:
        asyncio.run(make_service(openlibrary_status=500).search_books(SearchQuery(q="dune")))
    assert e.value.upstream_status == 500

def test_strict_movie_search_ok():
    response = asyncio.run(make_service().search_movies(SearchQuery(q="dune", page=2)))
    assert response.total_results == 2
    assert response.page == 2


# ------------------------------------------------------
# Fan-out / fan-in
# ------------------------------------------------------

def test_combined_search_waits_for_all_branches_before_raising():
    settled = []

    async def handler(request):
        if request.url.host == "openlibrary.org":
            raise RuntimeError("boom")
        await asyncio.sleep(0.2)
        settled.append("tmdb")
        return httpx.Response(200, json={"results": MOVIES})

    service = CatalogService(Settings(tmdb_api_key="secret"), transport=httpx.MockTransport(handler))

    async def _run():
        with pytest.raises(RuntimeError):
            await service.search(SearchQuery(q="dune"))
        pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
        return pending

    pending = asyncio.run(_run())

    assert settled == ["tmdb"]
    assert pending == []

def test_combined_search_runs_branches_concurrently():
    async def _run():
        started = {"api.themoviedb.org": asyncio.Event(), "openlibrary.org": asyncio.Event()}

        async def handler(request):
            host = request.url.host
            started[host].set()
            other = next(event for name, event in started.items() if name != host)
            # Fails with a timeout if the branches run one after the other
            await asyncio.wait_for(other.wait(), timeout=2.0)
            if host == "api.themoviedb.org":
                return httpx.Response(200, json={"results": MOVIES})
            return httpx.Response(200, json={"docs": BOOKS})

        service = CatalogService(Settings(tmdb_api_key="secret"), transport=httpx.MockTransport(handler))
        return await service.search(SearchQuery(q="dune"))

    response = asyncio.run(_run())

    assert [r.source for r in response.results] == ["tmdb", "tmdb", "openlibrary"]
