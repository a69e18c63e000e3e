"""Bounds and initial-selection resolution for the date picker.

The duck-typed widget options (``fixed`` as a unit string or a partial date,
``min``/``max`` as a partial date or ``"now"``) are parsed once into a
tagged variant by :func:`parse_bounds_config`; everything downstream only
sees :class:`FixedUnit`, :class:`FixedPartial` or :class:`ExplicitBounds`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union

from date_value import ConfigError, DatePartial, DateValue, check_unit

logger = logging.getLogger(__name__)


class _Now:
    """Sentinel for a bound that follows the current day."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NOW"


NOW = _Now()

DateField = Union[DateValue, _Now]

DEFAULT_MIN: DatePartial = {"day": 1, "month": 1, "year": 1900}
DEFAULT_MAX: DatePartial = {"day": 31, "month": 12, "year": 2100}


@dataclass(frozen=True)
class FixedUnit:
    unit: str


@dataclass(frozen=True)
class FixedPartial:
    """A window pinned to one month (``month`` given) or one whole year."""

    year: int
    month: int | None = None

    def start(self) -> DateValue:
        return DateValue.from_fields(self.year, self.month or 1, 1)

    def end(self) -> DateValue:
        return self.start().end_of("month" if self.month is not None else "year")


@dataclass(frozen=True)
class ExplicitBounds:
    min: DateField
    max: DateField


BoundsConfig = Union[FixedUnit, FixedPartial, ExplicitBounds]


@dataclass(frozen=True)
class ResolvedBounds:
    min_date: DateValue
    max_date: DateValue

    def __post_init__(self) -> None:
        if self.min_date > self.max_date:
            raise ConfigError(
                f"min date {self.min_date} is after max date {self.max_date}"
            )

    def contains(self, d: DateValue) -> bool:
        return self.min_date <= d <= self.max_date


# ------------------------------------------------------------------
# Parsing the widget options
# ------------------------------------------------------------------
def _parse_fixed_partial(fixed: Mapping) -> FixedPartial:
    unknown = set(fixed) - {"year", "month"}
    if unknown or "year" not in fixed:
        raise ConfigError(
            f"fixed partial date must be {{year, month?}}, got {dict(fixed)!r}"
        )
    month = fixed.get("month")
    # Validates field types and the month range.
    DateValue.from_fields(fixed["year"], month if month is not None else 1)
    return FixedPartial(fixed["year"], month)


def _parse_date_field(value, default: DatePartial, name: str) -> DateField:
    if value is None:
        return DateValue.from_partial(default)
    if isinstance(value, str):
        if value == "now":
            return NOW
        raise ConfigError(f"{name} must be a partial date or 'now', got {value!r}")
    if isinstance(value, DateValue):
        return value
    if isinstance(value, Mapping):
        return DateValue.from_partial(value)
    raise ConfigError(f"{name} must be a partial date or 'now', got {value!r}")


def parse_bounds_config(fixed=None, min=None, max=None) -> BoundsConfig:
    """Turn raw ``fixed``/``min``/``max`` options into a :data:`BoundsConfig`.

    ``fixed`` takes precedence; when it is set ``min`` and ``max`` are not
    inspected at all.
    """
    if fixed == "":
        fixed = None
    if fixed is not None:
        if isinstance(fixed, str):
            return FixedUnit(check_unit(fixed))
        if isinstance(fixed, Mapping):
            return _parse_fixed_partial(fixed)
        raise ConfigError(f"fixed must be a unit or a partial date, got {fixed!r}")
    return ExplicitBounds(
        _parse_date_field(min, DEFAULT_MIN, "min"),
        _parse_date_field(max, DEFAULT_MAX, "max"),
    )


def parse_start(start) -> DateValue | None:
    if start is None:
        return None
    if isinstance(start, DateValue):
        return start
    return DateValue.from_partial(start)


# ------------------------------------------------------------------
# Resolution
# ------------------------------------------------------------------
def _resolve_field(field: DateField, now: DateValue) -> DateValue:
    if field is NOW:
        return now.truncate_to("day")
    return field


def resolve_bounds(config: BoundsConfig, now: DateValue) -> ResolvedBounds:
    """Compute the concrete ``[min_date, max_date]`` window for *config*."""
    if isinstance(config, FixedUnit):
        unit = check_unit(config.unit)
        bounds = ResolvedBounds(
            now.truncate_to(unit), now.end_of(unit).truncate_to("day"),
        )
    elif isinstance(config, FixedPartial):
        bounds = ResolvedBounds(config.start(), config.end().truncate_to("day"))
    elif isinstance(config, ExplicitBounds):
        bounds = ResolvedBounds(
            _resolve_field(config.min, now),
            _resolve_field(config.max, now).truncate_to("day"),
        )
    else:
        raise ConfigError(f"Unrecognised bounds configuration {config!r}")
    logger.debug("Resolved %r against %s -> %s..%s",
                 config, now, bounds.min_date, bounds.max_date)
    return bounds


def resolve_initial_selection(
    start: DateValue | None,
    bounds: ResolvedBounds,
    fixed_partial: FixedPartial | None,
    now: DateValue,
) -> DateValue:
    """Pick the date selected when the widget first appears.

    An explicit *start* always wins, then today when it is in range, then
    the start of a fixed partial window, and finally ``min_date``.
    """
    if start is not None:
        return start
    today = now.truncate_to("day")
    if bounds.contains(today):
        return today
    if fixed_partial is not None:
        return fixed_partial.start()
    return bounds.min_date
