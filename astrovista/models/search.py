"""Models for the search pipeline and its response envelopes."""

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel

from astrovista.models.apod import Apod


@dataclass(frozen=True)
class SearchFilter:
    """Validated, normalized search parameters for one request."""

    query: str = ""
    start_date: date | None = None
    end_date: date | None = None
    media_type: str | None = None
    sort: str = "desc"


@dataclass(frozen=True)
class PageInfo:
    page: int
    per_page: int
    total_records: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class SearchLinks(BaseModel):
    next: str | None = None
    previous: str | None = None
    first: str | None = None
    last: str | None = None


class SearchResponse(BaseModel):
    totalRecords: int
    totalPages: int
    page: int
    perPage: int
    sort: str
    hasNextPage: bool
    hasPreviousPage: bool
    links: SearchLinks
    apods: list[Apod]


class ErrorResponse(BaseModel):
    error: str
    cause: str
    code: int
    timestamp: str
