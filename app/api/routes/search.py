from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from app.core.catalog_service import CatalogService
from app.models.search_query import SearchQuery

router = APIRouter()


def _service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


@router.get("/api/search")
async def search(
    request: Request,
    q: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
):
    # Either catalog failing only drops its results
    query = SearchQuery.from_params(q, page=page, limit=limit, type=type)
    response = await _service(request).search(query)
    return JSONResponse(content=response.to_payload())


@router.get("/api/movies/search")
async def search_movies(
    request: Request,
    q: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
):
    query = SearchQuery.from_params(q, page=page, type="movies")
    response = await _service(request).search_movies(query)
    return JSONResponse(content=response.to_payload())


@router.get("/api/books/search")
async def search_books(
    request: Request,
    q: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
):
    query = SearchQuery.from_params(q, page=page, limit=limit, type="books")
    response = await _service(request).search_books(query)
    return JSONResponse(content=response.to_payload())
