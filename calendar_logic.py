"""Pure calendar calculations, no UI dependencies."""

from __future__ import annotations

import calendar
from dataclasses import dataclass

from babel import Locale
from babel.dates import get_day_names

from calendar_bounds import ResolvedBounds
from date_value import DateValue, parse_locale


@dataclass(frozen=True)
class MonthCell:
    date: DateValue  # 1st of the month
    label: str
    disabled: bool
    highlighted: bool


@dataclass(frozen=True)
class DayCell:
    date: DateValue
    disabled: bool
    today: bool
    selected: bool


def month_cells(selected: DateValue, bounds: ResolvedBounds, now: DateValue,
                locale: Locale | str) -> list[MonthCell]:
    """Return the 12 month buttons for the year of *selected*, January first.

    A month is highlighted when it is the current month, but never when it
    is the first month of the window or lies at/after ``max_date``; both
    ends are exclusive so a boundary month is not highlighted twice.
    """
    if isinstance(locale, str):
        locale = parse_locale(locale)
    min_month = bounds.min_date.truncate_to("month")
    max_date = bounds.max_date
    this_month = now.truncate_to("month")
    year_start = selected.truncate_to("year")

    cells: list[MonthCell] = []
    for i in range(12):
        d = year_start.add_months(i)
        cells.append(MonthCell(
            date=d,
            label=d.month_name(locale),
            disabled=d > max_date or d < min_month,
            highlighted=d == this_month and min_month < d < max_date,
        ))
    return cells


def month_grid(year: int, month: int, first_weekday: int = 0) -> list[list[int | None]]:
    """Return a 6×7 grid for the given month.

    Each cell is a day number (1–31) or None for empty slots.
    Weeks start on *first_weekday* (0 = Monday, the ISO convention).
    Always 6 rows so the calendar height stays constant.
    """
    cal = calendar.Calendar(firstweekday=first_weekday)
    days = cal.itermonthdays(year, month)

    grid: list[list[int | None]] = []
    row: list[int | None] = []
    for d in days:
        row.append(d if d != 0 else None)
        if len(row) == 7:
            grid.append(row)
            row = []
    # Pad to exactly 6 rows
    while len(grid) < 6:
        grid.append([None] * 7)
    return grid


def day_cells(selected: DateValue, bounds: ResolvedBounds, today: DateValue,
              first_weekday: int = 0) -> list[list[DayCell | None]]:
    """Day-grid data for the month of *selected*.

    Days outside ``[min_date, max_date]`` come back disabled; the renderer
    must not offer them for selection.
    """
    rows: list[list[DayCell | None]] = []
    for week in month_grid(selected.year, selected.month, first_weekday):
        row: list[DayCell | None] = []
        for day in week:
            if day is None:
                row.append(None)
                continue
            d = DateValue(selected.year, selected.month, day)
            row.append(DayCell(
                date=d,
                disabled=not bounds.contains(d),
                today=d == today,
                selected=d == selected,
            ))
        rows.append(row)
    return rows


def weekday_names(locale: Locale | str, first_weekday: int = 0) -> list[str]:
    """Abbreviated weekday headers, rotated to start on *first_weekday*."""
    if isinstance(locale, str):
        locale = parse_locale(locale)
    names = get_day_names("abbreviated", locale=locale)  # 0 = Monday
    return [names[(first_weekday + i) % 7] for i in range(7)]
