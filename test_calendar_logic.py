import pytest

from calendar_bounds import ResolvedBounds
from calendar_logic import day_cells, month_cells, month_grid, weekday_names
from date_value import DateValue


def dv(y, m, d):
    return DateValue(y, m, d)


WIDE = ResolvedBounds(dv(1900, 1, 1), dv(2100, 12, 31))


# --- Month grid ---


@pytest.mark.parametrize("lang", ["en-US", "de-DE", "ja-JP"])
def test_month_cells_shape(lang):
    cells = month_cells(dv(2024, 7, 19), WIDE, dv(2024, 7, 19), lang)
    assert len(cells) == 12
    assert [c.date for c in cells] == [dv(2024, m, 1) for m in range(1, 13)]
    assert len({c.label for c in cells}) == 12


def test_month_cell_labels_follow_locale():
    cells = month_cells(dv(2024, 7, 19), WIDE, dv(2024, 7, 19), "en-US")
    assert cells[0].label == "January"
    assert cells[11].label == "December"


def test_month_cells_disabled_outside_window():
    bounds = ResolvedBounds(dv(2024, 3, 15), dv(2024, 9, 1))
    cells = month_cells(dv(2024, 6, 1), bounds, dv(2024, 6, 1), "en-US")
    disabled = [c.date.month for c in cells if c.disabled]
    # March stays enabled although min is mid-month; September 1st equals max.
    assert disabled == [1, 2, 10, 11, 12]


def test_current_month_is_highlighted_inside_window():
    bounds = ResolvedBounds(dv(2024, 3, 15), dv(2024, 9, 30))
    cells = month_cells(dv(2024, 6, 1), bounds, dv(2024, 6, 10), "en-US")
    assert [c.date.month for c in cells if c.highlighted] == [6]


def test_highlight_excludes_min_month_boundary():
    bounds = ResolvedBounds(dv(2024, 3, 15), dv(2024, 9, 30))
    cells = month_cells(dv(2024, 6, 1), bounds, dv(2024, 3, 20), "en-US")
    assert not any(c.highlighted for c in cells)


def test_highlight_excludes_max_boundary_on_first_of_month():
    bounds = ResolvedBounds(dv(2024, 1, 1), dv(2024, 6, 1))
    cells = month_cells(dv(2024, 6, 1), bounds, dv(2024, 6, 1), "en-US")
    assert not any(c.highlighted for c in cells)


def test_highlight_keeps_max_month_when_max_is_later_in_month():
    bounds = ResolvedBounds(dv(2024, 1, 1), dv(2024, 6, 20))
    cells = month_cells(dv(2024, 6, 1), bounds, dv(2024, 6, 5), "en-US")
    assert [c.date.month for c in cells if c.highlighted] == [6]


def test_no_highlight_when_viewing_another_year():
    cells = month_cells(dv(2023, 6, 1), WIDE, dv(2024, 6, 5), "en-US")
    assert not any(c.highlighted for c in cells)


# --- Day grid ---


def test_month_grid_is_six_rows_monday_first():
    grid = month_grid(2024, 2)
    assert len(grid) == 6
    assert all(len(row) == 7 for row in grid)
    # 1 February 2024 was a Thursday
    assert grid[0] == [None, None, None, 1, 2, 3, 4]
    assert grid[-1] == [None] * 7


def test_month_grid_sunday_first():
    grid = month_grid(2024, 2, first_weekday=6)
    assert grid[0] == [None, None, None, None, 1, 2, 3]


def test_day_cells_flags():
    bounds = ResolvedBounds(dv(2024, 2, 10), dv(2024, 12, 31))
    cells = [c for row in day_cells(dv(2024, 2, 14), bounds, dv(2024, 2, 20))
             for c in row if c is not None]
    assert len(cells) == 29
    assert [c.date.day for c in cells if c.disabled] == list(range(1, 10))
    assert [c.date.day for c in cells if c.today] == [20]
    assert [c.date.day for c in cells if c.selected] == [14]


def test_weekday_names_rotate():
    assert weekday_names("en-US") == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert weekday_names("en-US", first_weekday=6)[0] == "Sun"
