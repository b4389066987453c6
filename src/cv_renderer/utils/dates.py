"""Date formatting for record dates given as YYYY-MM or a bare year."""

from __future__ import annotations

import re

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sept", "Oct", "Nov", "Dec"]

_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{1,2})$")


def format_date(value: str | int | None, year_only: bool = False) -> str:
    """Format "2022-08" as "Aug 2022".

    year_only is for education dates, which are often bare years: a
    four-character value is returned as is. A YYYY-MM value is still
    formatted with its month, and anything that does not parse is
    returned unchanged.
    """
    if value is None:
        return ""
    raw = str(value).strip()
    if not raw:
        return ""
    if year_only and len(raw) == 4:
        return raw

    match = _YEAR_MONTH.match(raw)
    if match:
        year, month = match.group(1), int(match.group(2))
        if not 1 <= month <= 12:
            return raw
        return f"{MONTHS[month - 1]} {year}"

    return raw


def format_date_range(
    start: str | int | None,
    end: str | int | None,
    *,
    year_only: bool = False,
    expected_end: str | None = None,
) -> str:
    """Format a start/end pair, an open end reading as Present."""
    start_text = format_date(start, year_only)
    if end:
        end_text = format_date(end, year_only)
    elif expected_end:
        end_text = f"Expected {format_date(expected_end, year_only)}"
    else:
        end_text = "Present"

    if not start_text:
        return end_text
    return f"{start_text} - {end_text}"

