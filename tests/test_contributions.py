"""Tests for contribution-calendar ingestion."""
import json
from datetime import date

import pytest

from conftest import cells
from skyline.contracts import ActivityCell
from skyline.contributions import grid_from_response, grid_year, grid_year_span, load_grid


class TestGridFromResponse:

    def test_shape_and_counts(self, calendar_payload):
        grid = grid_from_response(calendar_payload, today=date(2025, 1, 1))
        assert [len(column) for column in grid] == [7, 3]
        assert [cell.count for cell in grid[0]] == [0, 4, 9, 1, 0, 3, 0]
        assert grid[0][1].date == "2024-12-23"
        assert not any(cell.is_future for column in grid for cell in column)

    def test_future_days(self, calendar_payload):
        grid = grid_from_response(calendar_payload, today=date(2024, 12, 29))
        assert [cell.is_future for cell in grid[1]] == [False, True, True]

    def test_unwrapped_payload(self, calendar_payload):
        grid = grid_from_response(calendar_payload["data"], today=date(2025, 1, 1))
        assert len(grid) == 2

    def test_missing_calendar(self):
        with pytest.raises(ValueError):
            grid_from_response({"data": {"user": {}}})

    def test_load_grid(self, calendar_payload, tmp_path):
        path = tmp_path / "calendar.json"
        path.write_text(json.dumps(calendar_payload), encoding="utf-8")
        grid = load_grid(path, today=date(2025, 1, 1))
        assert sum(cell.count for column in grid for cell in column) == 17


class TestGridYear:

    def test_most_common_year(self, calendar_payload):
        grid = grid_from_response(calendar_payload, today=date(2025, 1, 1))
        assert grid_year(grid) == 2024

    def test_undated(self):
        assert grid_year([cells(1, 2)]) is None


class TestGridYearSpan:

    def test_single_year(self, calendar_payload):
        grid = grid_from_response(calendar_payload, today=date(2025, 1, 1))
        assert grid_year_span(grid) == (2024, 2024)

    def test_trailing_year_spans_two_years(self):
        grid = [[
            ActivityCell(count=1, date="2024-10-20"),
            ActivityCell(count=0, date="2025-03-01"),
            ActivityCell(count=2, date="2025-10-19"),
        ]]
        assert grid_year_span(grid) == (2024, 2025)

    def test_future_days_ignored(self):
        grid = [[
            ActivityCell(count=1, date="2025-12-30"),
            ActivityCell(count=0, date="2026-01-02", is_future=True),
        ]]
        assert grid_year_span(grid) == (2025, 2025)

    def test_undated(self):
        assert grid_year_span([cells(1, 2)]) is None
