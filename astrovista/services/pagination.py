"""Page metadata and navigation links for search results."""

import math
from urllib.parse import urlencode

from astrovista.models.search import PageInfo, SearchFilter, SearchLinks
from astrovista.services.validation import format_date

SEARCH_PATH = "/apods/search"


def page_offset(page: int, per_page: int) -> int:
    """Rows to skip before the requested page."""
    return (page - 1) * per_page


def paginate(total_records: int, page: int, per_page: int, returned_count: int) -> PageInfo:
    """Compute page metadata from the store's count and the page actually returned.

    has_next_page follows whether the current page came back full, not
    whether page < total_pages.
    """
    return PageInfo(
        page=page,
        per_page=per_page,
        total_records=total_records,
        total_pages=math.ceil(total_records / per_page) if total_records else 0,
        has_next_page=returned_count == per_page,
        has_previous_page=page > 1,
    )


def build_search_url(search_filter: SearchFilter, per_page: int, page: int) -> str:
    """Serialize a filter and target page onto the search path.

    Parameters without a value are left out entirely so that two links for
    the same state are always string-equal.
    """
    params = [
        ("q", search_filter.query),
        ("startDate", format_date(search_filter.start_date) if search_filter.start_date else None),
        ("endDate", format_date(search_filter.end_date) if search_filter.end_date else None),
        ("mediaType", search_filter.media_type),
        ("perPage", str(per_page) if per_page else None),
        ("page", str(page)),
        ("sort", search_filter.sort),
    ]
    return f"{SEARCH_PATH}?{urlencode([(k, v) for k, v in params if v])}"


def build_links(search_filter: SearchFilter, page_info: PageInfo) -> SearchLinks:
    per_page = page_info.per_page
    page = page_info.page

    next_link = None
    if page_info.has_next_page:
        next_link = build_search_url(search_filter, per_page, page + 1)

    previous_link = None
    if page_info.has_previous_page:
        previous_link = build_search_url(search_filter, per_page, max(page - 1, 1))

    first_link = build_search_url(search_filter, per_page, 1)
    last_link = build_search_url(search_filter, per_page, page_info.total_pages)

    return SearchLinks(
        next=next_link,
        previous=previous_link,
        first=first_link,
        last=None if last_link == first_link else last_link,
    )
