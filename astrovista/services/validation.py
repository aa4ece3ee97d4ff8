"""Validators for raw search query parameters.

Each validator takes the raw query string (or None when the parameter was not
sent) and returns the typed value, raising a ValidationError subclass that
names the specific problem otherwise.
"""

import re
from datetime import date, datetime

from astrovista.errors import (
    InvalidDateFormat,
    InvalidDateRange,
    InvalidMediaType,
    InvalidPage,
    InvalidPerPage,
    InvalidSortValue,
)

DATE_FORMAT = "%Y-%m-%d"
MEDIA_TYPES = ("image", "video")
SORT_VALUES = ("asc", "desc")
DEFAULT_SORT = "desc"
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 200  # exclusive

_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def parse_date(value: str | None) -> date | None:
    """Parse a strict YYYY-MM-DD calendar date. Empty input means no bound."""
    if not value:
        return None
    if not _DATE_RE.match(value):
        raise InvalidDateFormat()
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        # Matches the pattern but isn't a real day (e.g. 2023-02-30)
        raise InvalidDateFormat()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def validate_date_range(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and start > end:
        raise InvalidDateRange()


def validate_media_type(value: str | None) -> str | None:
    if not value:
        return None
    if value not in MEDIA_TYPES:
        raise InvalidMediaType()
    return value


def validate_sort(value: str | None) -> str:
    if not value:
        return DEFAULT_SORT
    if value not in SORT_VALUES:
        raise InvalidSortValue()
    return value


def _parse_int(value: str) -> int | None:
    value = value.strip()
    if not _INT_RE.match(value):
        return None
    return int(value)


def validate_per_page(value: str | None, default: int = DEFAULT_PER_PAGE) -> int:
    """perPage must be an integer with 1 <= perPage < 200."""
    if value is None or value == "":
        return default
    per_page = _parse_int(value)
    if per_page is None or per_page < 1 or per_page >= MAX_PER_PAGE:
        raise InvalidPerPage()
    return per_page


def validate_page(value: str | None) -> int:
    if value is None or value == "":
        return DEFAULT_PAGE
    page = _parse_int(value)
    if page is None or page < 1:
        raise InvalidPage()
    return page
