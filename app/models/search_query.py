from typing import Optional

from pydantic import BaseModel, Field

from app.core.exceptions import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _parse_int(raw: Optional[str], default: int) -> Optional[int]:
    if raw is None or raw == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return None


class SearchQuery(BaseModel):
    q: str = Field(..., min_length=1, description="Search query string")

    type: Optional[str] = Field(
        default=None,
        description='Catalog filter: "movies" or "books"; both when absent'
    )

    page: int = Field(
        default=DEFAULT_PAGE,
        ge=1,
        description="Page number (1-based)"
    )

    limit: int = Field(
        default=DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        description="Number of book results per page"
    )

    @property
    def wants_movies(self) -> bool:
        return self.type is None or self.type == "movies"

    @property
    def wants_books(self) -> bool:
        return self.type is None or self.type == "books"

    @classmethod
    def from_params(
        cls,
        q: Optional[str],
        page: Optional[str] = None,
        limit: Optional[str] = None,
        type: Optional[str] = None,
    ) -> "SearchQuery":
        """
        Validate raw query-string values and raise ValidationError with the
        machine-readable code the error envelope reports.
        """
        if not q:
            raise ValidationError('Query parameter "q" is required', code="missing_query")

        page_num = _parse_int(page, DEFAULT_PAGE)
        if page_num is None or page_num < 1:
            raise ValidationError(
                "Page must be a positive integer",
                details={"page": page},
                code="invalid_page",
            )

        limit_num = _parse_int(limit, DEFAULT_LIMIT)
        if limit_num is None or not 1 <= limit_num <= MAX_LIMIT:
            raise ValidationError(
                f"Limit must be between 1 and {MAX_LIMIT}",
                details={"limit": limit},
                code="invalid_limit",
            )

        return cls(q=q, type=type or None, page=page_num, limit=limit_num)
