import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.errors import catalog_error_handler, http_error_handler
from app.api.middleware import cors_middleware
from app.api.routes import meta, search
from app.core.catalog_service import CatalogService
from app.core.config import Settings
from app.core.exceptions import CatalogError


def create_app(
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if not settings.tmdb_api_key:
            logging.getLogger(__name__).warning("TMDB_API_KEY is not set; movie search is disabled")
        yield

    app = FastAPI(
        title="Movies & Books Search API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.catalog_service = CatalogService(settings, transport=transport)

    app.include_router(search.router, tags=["search"])
    app.include_router(meta.router, tags=["meta"])

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.middleware("http")(cors_middleware)
    return app


app = create_app()
