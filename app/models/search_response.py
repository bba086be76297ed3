from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class MovieResult(_WireModel):
    id: int
    title: str
    overview: str
    release_date: str
    poster_url: Optional[str] = None
    rating: float
    source: Literal["tmdb"] = "tmdb"


class BookResult(_WireModel):
    key: str
    title: str
    authors: List[str] = Field(default_factory=list)
    publish_year: Optional[int] = None
    cover_url: Optional[str] = None
    isbn: List[str] = Field(default_factory=list)
    subjects: List[str] = Field(default_factory=list)
    source: Literal["openlibrary"] = "openlibrary"


SearchResult = Annotated[Union[MovieResult, BookResult], Field(discriminator="source")]


class SearchResponse(_WireModel):
    results: List[SearchResult] = Field(default_factory=list)
    page: int
    total_pages: Optional[int] = None

    @computed_field(alias="totalResults")
    @property
    def total_results(self) -> int:
        # Count of what is returned here, never an upstream-reported total
        return len(self.results)

    def to_payload(self) -> Dict[str, Any]:
        exclude = {"total_pages"} if self.total_pages is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
