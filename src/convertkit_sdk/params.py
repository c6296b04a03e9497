"""
Parameter bag helpers shared by every operation.

This module holds the pieces of request composition that are identical
across endpoints:

- cursor pagination and the total-count flag for list endpoints
- date and timestamp formatting for filters and body fields
- removal of blank values before a bag is sent
"""

from collections.abc import Mapping
from datetime import date
from datetime import datetime

from convertkit_sdk.types import ParamValue
from convertkit_sdk.types import Params

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_PER_PAGE = 100


def format_date(value: date | None) -> str:
    """Format a date filter as ``YYYY-MM-DD``. ``None`` becomes ``""``."""
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)


def format_datetime(value: datetime | date | None) -> str:
    """Format a timestamp field as ``YYYY-MM-DD HH:MM:SS``. ``None`` becomes ``""``."""
    if value is None:
        return ""
    return value.strftime(DATETIME_FORMAT)


def add_date_filters(params: Params, **dates: date | None) -> Params:
    """
    Add date filters to ``params`` in call order, skipping ``None`` values.

    Example:
        add_date_filters({}, created_after=date(2024, 1, 1), created_before=None)
        # {"created_after": "2024-01-01"}
    """
    for name, value in dates.items():
        if value is not None:
            params[name] = format_date(value)
    return params


def build_pagination_params(
    params: Mapping[str, ParamValue] | None = None,
    include_total_count: bool = False,
    after_cursor: str = "",
    before_cursor: str = "",
    per_page: int = DEFAULT_PER_PAGE,
    *,
    always_include_total_count: bool = True,
) -> Params:
    """
    Merge list controls into a copy of ``params``.

    Cursors are opaque and passed through verbatim. When both cursors are
    given, both are sent and the API decides precedence.

    Args:
        params: Filters already built for the endpoint.
        include_total_count: Ask the API to return ``pagination.total_count``.
        after_cursor: Return results after this cursor.
        before_cursor: Return results before this cursor.
        per_page: Page size. The maximum is enforced by the API.
        always_include_total_count: Send ``include_total_count`` even when
            false. The v4 API expects the flag on every list call.

    Returns:
        Params: A new parameter bag; ``params`` is left untouched.
    """
    merged: Params = dict(params or {})
    if include_total_count or always_include_total_count:
        merged["include_total_count"] = include_total_count
    if after_cursor:
        merged["after"] = after_cursor
    if before_cursor:
        merged["before"] = before_cursor
    if per_page:
        merged["per_page"] = per_page
    return merged


def strip_blank_values(params: Mapping[str, ParamValue] | None) -> Params:
    """
    Drop top-level entries whose value is ``None`` or an empty string.

    Nested values are left alone: an empty string inside ``fields`` clears
    a custom field and has to reach the API.
    """
    if not params:
        return {}
    return {
        key: value
        for key, value in params.items()
        if value is not None and not (isinstance(value, str) and value == "")
    }
