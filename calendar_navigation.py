"""Navigation state machine: selected date plus day/month view granularity."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from calendar_bounds import ResolvedBounds
from date_value import DateValue, Ordering

logger = logging.getLogger(__name__)


class Granularity(enum.Enum):
    DAY = "day"      # day grid, arrows step by month
    MONTH = "month"  # month grid, arrows step by year


@dataclass
class NavigationState:
    selected_date: DateValue
    granularity: Granularity = Granularity.DAY


class NavigationController:
    """Owns one widget's :class:`NavigationState`.

    Transitions are gated by the ``can_*`` predicates and are no-ops when
    the matching control would be disabled. Each returns ``True`` when the
    state changed.
    """

    def __init__(self, bounds: ResolvedBounds, initial: DateValue,
                 months_only: bool = False) -> None:
        self.bounds = bounds
        self.months_only = months_only
        self.state = NavigationState(
            initial.truncate_to("day"),
            Granularity.MONTH if months_only else Granularity.DAY,
        )

    @property
    def selected_date(self) -> DateValue:
        return self.state.selected_date

    @property
    def granularity(self) -> Granularity:
        return self.state.granularity

    # ------------------------------------------------------------------
    # Disable predicates
    # ------------------------------------------------------------------
    def _at_edge(self, edge: DateValue) -> bool:
        sel = self.state.selected_date
        if self.state.granularity is Granularity.MONTH and sel.same_year(edge):
            return True
        return sel.same_month(edge)

    @property
    def can_step_backward(self) -> bool:
        return not self._at_edge(self.bounds.min_date)

    @property
    def can_step_forward(self) -> bool:
        return not self._at_edge(self.bounds.max_date)

    @property
    def can_toggle_view(self) -> bool:
        if self.state.granularity is Granularity.MONTH:
            return False
        return not self.bounds.min_date.same_month(self.bounds.max_date)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _shift(self, direction: int) -> None:
        sel = self.state.selected_date
        if self.state.granularity is Granularity.DAY:
            new = sel.add_months(direction)
        else:
            new = sel.add_years(direction)
        # A year step can land in the edge year but before min's / after max's
        # month; snapping keeps the selected month inside the window.
        if new.compare(self.bounds.min_date, "month") is Ordering.BEFORE:
            new = self.bounds.min_date
        elif new.compare(self.bounds.max_date, "month") is Ordering.AFTER:
            new = self.bounds.max_date
        self.state.selected_date = new
        logger.debug("Stepped %+d (%s view): %s -> %s", direction,
                     self.state.granularity.value, sel, new)

    def step_backward(self) -> bool:
        if not self.can_step_backward:
            return False
        self._shift(-1)
        return True

    def step_forward(self) -> bool:
        if not self.can_step_forward:
            return False
        self._shift(1)
        return True

    def toggle_view(self) -> bool:
        """Switch from the day grid to the month grid.

        Going back to the day grid only happens through :meth:`select_month`.
        """
        if not self.can_toggle_view:
            return False
        self.state.granularity = Granularity.MONTH
        return True

    def select_date(self, d: DateValue) -> None:
        # The day grid only offers in-range dates, so no bounds check here.
        self.state.selected_date = d.truncate_to("day")

    def select_month(self, d: DateValue) -> None:
        self.state.selected_date = d.truncate_to("day")
        if not self.months_only:
            self.state.granularity = Granularity.DAY

    def rebind(self, bounds: ResolvedBounds) -> None:
        """Swap in freshly resolved bounds, keeping the current state."""
        self.bounds = bounds

    def set_months_only(self, months_only: bool) -> None:
        """Months-only mode never shows the day grid."""
        self.months_only = months_only
        if months_only:
            self.state.granularity = Granularity.MONTH
