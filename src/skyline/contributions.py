"""
Conversion of contribution-calendar payloads into activity grids.

Accepts the GraphQL response shape::

    {"data": {"user": {"contributionsCollection": {"contributionCalendar": {
        "weeks": [{"contributionDays": [{"contributionCount": 3, "date": "2024-01-07"}, ...]}, ...]
    }}}}}

with or without the outer ``data`` wrapper.
"""
from __future__ import annotations

import json
import logging
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from skyline.contracts import ActivityCell, ActivityGrid

logger = logging.getLogger(__name__)


def _calendar(payload: Dict[str, Any]) -> Dict[str, Any]:
    root = payload.get("data", payload)
    try:
        return root["user"]["contributionsCollection"]["contributionCalendar"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Payload has no contribution calendar: missing {exc}") from exc


def grid_from_response(
    payload: Dict[str, Any],
    today: Optional[date] = None,
) -> List[List[ActivityCell]]:
    """Build an ActivityGrid (weeks of days); days after *today* are future cells."""
    today = today or date.today()
    grid: List[List[ActivityCell]] = []
    for week in _calendar(payload).get("weeks", []):
        column = []
        for day in week.get("contributionDays", []):
            day_str = day.get("date")
            is_future = bool(day_str) and date.fromisoformat(day_str) > today
            column.append(ActivityCell(
                count=int(day.get("contributionCount", 0)),
                date=day_str,
                is_future=is_future,
            ))
        grid.append(column)
    logger.debug("Loaded %d weeks of contributions", len(grid))
    return grid


def load_grid(path: Union[str, Path], today: Optional[date] = None) -> List[List[ActivityCell]]:
    with Path(path).open("r", encoding="utf-8") as f:
        payload = json.load(f)
    return grid_from_response(payload, today=today)


def grid_year(grid: ActivityGrid) -> Optional[int]:
    """Most common year among dated cells, or None when the grid carries no dates."""
    years = Counter(
        date.fromisoformat(cell.date).year
        for column in grid
        for cell in column
        if cell.date
    )
    if not years:
        return None
    return years.most_common(1)[0][0]


def grid_year_span(grid: ActivityGrid) -> Optional[Tuple[int, int]]:
    """(earliest, latest) year among dated, non-future cells; None when undated."""
    years = [
        date.fromisoformat(cell.date).year
        for column in grid
        for cell in column
        if cell.date and not cell.is_future
    ]
    if not years:
        return None
    return min(years), max(years)
