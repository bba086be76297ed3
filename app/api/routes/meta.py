from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter()

# Every verb except OPTIONS, which the middleware answers
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]

API_DOCUMENTATION: Dict[str, Any] = {
    "name": "Movies & Books Search API",
    "version": "1.0.0",
    "description": "Search for movies using TMDB and books using OpenLibrary",
    "endpoints": {
        "/api/movies/search": {
            "method": "GET",
            "description": "Search for movies using TMDB",
            "parameters": {
                "q": "Search query (required)",
                "page": "Page number (optional, default: 1)",
            },
            "example": "/api/movies/search?q=inception&page=1",
        },
        "/api/books/search": {
            "method": "GET",
            "description": "Search for books using OpenLibrary",
            "parameters": {
                "q": "Search query (required)",
                "page": "Page number (optional, default: 1)",
                "limit": "Results per page (optional, default: 20, max: 100)",
            },
            "example": "/api/books/search?q=harry%20potter&page=1&limit=10",
        },
        "/api/search": {
            "method": "GET",
            "description": "Search for both movies and books",
            "parameters": {
                "q": "Search query (required)",
                "type": 'Filter by type: "movies" or "books" (optional, searches both if not specified)',
                "page": "Page number (optional, default: 1)",
                "limit": "Results per page for books (optional, default: 20, max: 100)",
            },
            "example": "/api/search?q=lord%20of%20the%20rings&type=books",
        },
    },
}


@router.api_route("/api", methods=ANY_METHOD)
@router.api_route("/api/", methods=ANY_METHOD)
def api_documentation() -> Dict[str, Any]:
    return API_DOCUMENTATION


@router.api_route("/health", methods=ANY_METHOD)
def health() -> Dict[str, str]:
    # Liveness check always returns healthy
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
