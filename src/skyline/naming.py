"""Output file naming and year-range labels."""

from __future__ import annotations

from datetime import date
from typing import Optional

STL_SUFFIX = ".stl"


def format_year_range(start_year: int, end_year: int) -> str:
    """``"2024"`` for a single year, ``"2014-24"`` for a range."""
    if start_year == end_year:
        return f"{start_year}"
    return f"{start_year:04d}-{end_year % 100:02d}"


def ensure_stl_suffix(path: str) -> str:
    if path.lower().endswith(STL_SUFFIX):
        return path
    return path + STL_SUFFIX


def is_trailing_year(start_year: int, end_year: int, today: Optional[date] = None) -> bool:
    """True when the range is "the last 12 months" ending this year."""
    today = today or date.today()
    return end_year == today.year and start_year == today.year - 1


def generate_output_filename(
    username: str,
    start_year: int,
    end_year: int,
    custom_path: Optional[str] = None,
    ytd_end: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """Default STL filename for a user and period, unless *custom_path* is set.

    ``ytd_end`` (YYYY-MM-DD) names the end of a trailing-twelve-months range;
    an unparsable value falls back to *today*.
    """
    if custom_path:
        return ensure_stl_suffix(custom_path)

    today = today or date.today()
    if is_trailing_year(start_year, end_year, today):
        end_date = today
        if ytd_end:
            try:
                end_date = date.fromisoformat(ytd_end)
            except ValueError:
                pass
        return f"{username}-contributions-ytd-{end_date.isoformat()}{STL_SUFFIX}"
    if start_year == end_year:
        return f"{username}-contributions-{start_year}{STL_SUFFIX}"
    return f"{username}-contributions-{start_year}-{end_year}{STL_SUFFIX}"
