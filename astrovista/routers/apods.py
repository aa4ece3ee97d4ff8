"""Multi-record APOD routes: list, date range, and search."""

from datetime import date

import aiosqlite
from fastapi import APIRouter, Depends, Query

from astrovista.config import settings
from astrovista.database import get_db
from astrovista.errors import NotFoundError
from astrovista.models.apod import Apod, ApodDateRangeResponse
from astrovista.models.search import ErrorResponse, SearchResponse
from astrovista.services import apod_service, validation
from astrovista.services.responses import date_range_response
from astrovista.services.search_service import build_filter, search_apods

router = APIRouter(prefix="/apods", tags=["apods"])


@router.get("", response_model=list[Apod])
async def list_apods(db: aiosqlite.Connection = Depends(get_db)):
    """Every stored APOD, oldest first. Unfiltered and unpaginated."""
    return await apod_service.list_all(db)


@router.get(
    "/date-range",
    response_model=ApodDateRangeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def apods_date_range(
    start: str | None = None,
    end: str | None = None,
    db: aiosqlite.Connection = Depends(get_db),
):
    """APODs between start and end (inclusive).

    - start: YYYY-MM-DD, open when omitted
    - end: YYYY-MM-DD, defaults to today
    """
    start_date = validation.parse_date(start)
    end_date = validation.parse_date(end) or date.today()
    validation.validate_date_range(start_date, end_date)

    apods = await apod_service.list_date_range(
        db,
        validation.format_date(start_date) if start_date else None,
        validation.format_date(end_date),
    )
    if not apods:
        raise NotFoundError(
            cause="No APODs found for the given date range",
            message="No APODs found",
        )
    return date_range_response(apods)


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def search(
    q: str | None = None,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    media_type: str | None = Query(None, alias="mediaType"),
    per_page: str | None = Query(None, alias="perPage"),
    page: str | None = None,
    sort: str | None = None,
    db: aiosqlite.Connection = Depends(get_db),
):
    """Search APODs by title with date, media type, and paging filters.

    - q: case-insensitive title substring
    - startDate/endDate: inclusive YYYY-MM-DD bounds, open when omitted
    - mediaType: image | video
    - perPage: 1-199 (default 10)
    - page: 1-based page number
    - sort: asc | desc by date (default desc)
    """
    search_filter = build_filter(
        q=q,
        start_date=start_date,
        end_date=end_date,
        media_type=media_type,
        sort=sort,
    )
    per_page_value = validation.validate_per_page(per_page, default=settings.default_per_page)
    page_value = validation.validate_page(page)

    return await search_apods(db, search_filter, page_value, per_page_value)
