"""Filtered, paginated search over APOD records."""

import aiosqlite

from astrovista.database import rows_to_dicts
from astrovista.errors import NotFoundError
from astrovista.models.search import SearchFilter
from astrovista.services import validation
from astrovista.services.pagination import build_links, page_offset, paginate
from astrovista.services.responses import search_response

APOD_COLUMNS = "date, explanation, hdurl, media_type, service_version, title, url"


def build_filter(
    q: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    media_type: str | None = None,
    sort: str | None = None,
) -> SearchFilter:
    """Validate raw query parameters and compose them into a SearchFilter.

    Missing date bounds leave that side of the range open.
    """
    start = validation.parse_date(start_date)
    end = validation.parse_date(end_date)
    validation.validate_date_range(start, end)

    return SearchFilter(
        query=q or "",
        start_date=start,
        end_date=end,
        media_type=validation.validate_media_type(media_type),
        sort=validation.validate_sort(sort),
    )


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _where_clause(search_filter: SearchFilter) -> tuple[str, list]:
    """Translate a filter into a WHERE clause.

    SQLite's LIKE is case-insensitive, which gives the title substring match.
    """
    clause = "WHERE 1=1"
    params: list = []

    if search_filter.query:
        clause += " AND title LIKE ? ESCAPE '\\'"
        params.append(f"%{_escape_like(search_filter.query)}%")
    if search_filter.start_date:
        clause += " AND date >= ?"
        params.append(validation.format_date(search_filter.start_date))
    if search_filter.end_date:
        clause += " AND date <= ?"
        params.append(validation.format_date(search_filter.end_date))
    if search_filter.media_type:
        clause += " AND media_type = ?"
        params.append(search_filter.media_type)

    return clause, params


async def count_apods(db: aiosqlite.Connection, search_filter: SearchFilter) -> int:
    where, params = _where_clause(search_filter)
    cursor = await db.execute(f"SELECT COUNT(*) FROM apods {where}", params)
    return (await cursor.fetchone())[0]


async def find_apods(
    db: aiosqlite.Connection,
    search_filter: SearchFilter,
    page: int,
    per_page: int,
) -> list[dict]:
    where, params = _where_clause(search_filter)
    order = "ASC" if search_filter.sort == "asc" else "DESC"

    cursor = await db.execute(
        f"""SELECT {APOD_COLUMNS} FROM apods
        {where}
        ORDER BY date {order}
        LIMIT ? OFFSET ?""",
        params + [per_page, page_offset(page, per_page)],
    )
    return rows_to_dicts(cursor, await cursor.fetchall())


async def search_apods(
    db: aiosqlite.Connection,
    search_filter: SearchFilter,
    page: int,
    per_page: int,
) -> dict:
    """Run a search and assemble the response envelope.

    Raises NotFoundError when the requested page holds no records.
    """
    apods = await find_apods(db, search_filter, page, per_page)
    if not apods:
        raise NotFoundError(cause="No results for the given query", message="No APODs found")

    total = await count_apods(db, search_filter)
    page_info = paginate(total, page, per_page, len(apods))
    links = build_links(search_filter, page_info)

    return search_response(apods, page_info, search_filter.sort, links)
