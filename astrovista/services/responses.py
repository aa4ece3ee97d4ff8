"""Response envelopes shared by every route."""

from datetime import datetime, timezone


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_response(message: str, cause: str, code: int) -> dict:
    """Build the error envelope: {error, cause, code, timestamp}."""
    return {
        "error": message,
        "cause": cause,
        "code": code,
        "timestamp": _timestamp(),
    }


def search_response(apods: list[dict], page_info, sort: str, links) -> dict:
    """Build the flat search envelope from a page of records and its metadata."""
    return {
        "totalRecords": page_info.total_records,
        "totalPages": page_info.total_pages,
        "page": page_info.page,
        "perPage": page_info.per_page,
        "sort": sort,
        "hasNextPage": page_info.has_next_page,
        "hasPreviousPage": page_info.has_previous_page,
        "links": links.model_dump(),
        "apods": apods,
    }


def date_range_response(apods: list[dict]) -> dict:
    return {"count": len(apods), "apods": apods}
