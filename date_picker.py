"""Configuration-driven date picker: widget options in, navigation engine out."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from calendar_bounds import (
    FixedPartial,
    ResolvedBounds,
    parse_bounds_config,
    parse_start,
    resolve_bounds,
    resolve_initial_selection,
)
from calendar_logic import DayCell, MonthCell, day_cells, month_cells, weekday_names
from calendar_navigation import Granularity, NavigationController
from date_value import ConfigError, DateValue, parse_locale

logger = logging.getLogger(__name__)

_OPTION_NAMES = frozenset({
    "fixed", "min", "max", "start", "lang", "months_only",
    "on_date_click", "aria_prev", "aria_next", "first_weekday",
})


def _noop(_d: DateValue) -> None:
    pass


class DatePicker:
    """One date-picker instance.

    All options are resolved in the constructor; an invalid configuration
    raises :class:`ConfigError` and no picker is created. The locale is
    held per instance and passed to every formatting call.
    """

    def __init__(
        self,
        *,
        fixed=None,
        min=None,
        max=None,
        start=None,
        lang: str = "en-US",
        months_only: bool = False,
        on_date_click: Callable[[DateValue], None] | None = None,
        aria_prev: str = "Previous",
        aria_next: str = "Next",
        first_weekday: int = 0,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._clock = clock
        self._options = {
            "fixed": fixed, "min": min, "max": max, "start": start,
            "lang": lang, "months_only": months_only,
            "on_date_click": on_date_click, "aria_prev": aria_prev,
            "aria_next": aria_next, "first_weekday": first_weekday,
        }
        self._apply(self._options)

        now = self.now()
        start_dt = parse_start(start)
        initial = resolve_initial_selection(
            start_dt, self.bounds, self._fixed_partial, now,
        )
        self.controller = NavigationController(self.bounds, initial, months_only)
        logger.debug("DatePicker created: bounds %s..%s, selected %s",
                     self.bounds.min_date, self.bounds.max_date, initial)

    def _apply(self, options: dict) -> None:
        """Validate *options* and install them; nothing changes on error."""
        config = parse_bounds_config(options["fixed"], options["min"], options["max"])
        bounds = resolve_bounds(config, self.now())
        locale = parse_locale(options["lang"])
        first_weekday = options["first_weekday"]
        if first_weekday not in range(7):
            raise ConfigError(f"first_weekday must be 0-6, got {first_weekday!r}")
        parse_start(options["start"])

        self.bounds: ResolvedBounds = bounds
        self._fixed_partial = config if isinstance(config, FixedPartial) else None
        self.locale = locale
        self.lang: str = options["lang"]
        self.months_only: bool = bool(options["months_only"])
        self.on_date_click: Callable[[DateValue], None] = options["on_date_click"] or _noop
        self.aria_prev: str = options["aria_prev"]
        self.aria_next: str = options["aria_next"]
        self.first_weekday: int = first_weekday

    def reconfigure(self, **options) -> None:
        """Re-resolve with updated options, keeping the current selection.

        ``start`` only affects the initial selection and is ignored here.
        """
        unknown = set(options) - _OPTION_NAMES
        if unknown:
            raise ConfigError(f"Unknown option(s): {sorted(unknown)}")
        merged = {**self._options, **options}
        self._apply(merged)
        self._options = merged
        self.controller.rebind(self.bounds)
        self.controller.set_months_only(self.months_only)
        logger.debug("DatePicker reconfigured: bounds %s..%s",
                     self.bounds.min_date, self.bounds.max_date)

    def refresh_now(self) -> None:
        """Re-resolve bounds that follow today (fixed units, ``"now"``).

        A selection whose month fell out of the moved window is re-seeded
        the same way as at construction.
        """
        self._apply(self._options)
        self.controller.rebind(self.bounds)
        sel = self.selected_date
        lo, hi = self.bounds.min_date, self.bounds.max_date
        if sel.compare(lo, "month") < 0 or sel.compare(hi, "month") > 0:
            now = self.now()
            self.controller.select_date(resolve_initial_selection(
                parse_start(self._options["start"]), self.bounds,
                self._fixed_partial, now,
            ))
        logger.debug("DatePicker refreshed: bounds %s..%s, selected %s",
                     lo, hi, self.selected_date)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def now(self) -> DateValue:
        return DateValue.today(self._clock)

    @property
    def selected_date(self) -> DateValue:
        return self.controller.selected_date

    @property
    def granularity(self) -> Granularity:
        return self.controller.granularity

    def header_label(self) -> str:
        sel = self.selected_date
        if self.granularity is Granularity.MONTH:
            return str(sel.year)
        return f"{sel.month_name(self.locale)} {sel.year}"

    # ------------------------------------------------------------------
    # Render data
    # ------------------------------------------------------------------
    def month_cells(self) -> list[MonthCell]:
        return month_cells(self.selected_date, self.bounds, self.now(), self.locale)

    def day_cells(self) -> list[list[DayCell | None]]:
        return day_cells(self.selected_date, self.bounds, self.now(), self.first_weekday)

    def weekday_names(self) -> list[str]:
        return weekday_names(self.locale, self.first_weekday)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def step_backward(self) -> bool:
        return self.controller.step_backward()

    def step_forward(self) -> bool:
        return self.controller.step_forward()

    def toggle_view(self) -> bool:
        return self.controller.toggle_view()

    def click_day(self, cell: DayCell) -> bool:
        if cell.disabled:
            return False
        self.controller.select_date(cell.date)
        self.on_date_click(cell.date)
        return True

    def click_month(self, cell: MonthCell) -> bool:
        if cell.disabled:
            return False
        if self.months_only:
            self.on_date_click(cell.date)
        else:
            self.controller.select_month(cell.date)
        return True
