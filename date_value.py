"""Immutable calendar date with day/month/year granularity operations."""

from __future__ import annotations

import calendar
import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Callable, Literal

from babel import Locale, UnknownLocaleError
from babel.dates import get_month_names

Unit = Literal["day", "month", "year"]
UNITS: tuple[str, ...] = ("day", "month", "year")

DatePartial = Mapping[str, int]
_PARTIAL_KEYS = ("year", "month", "day")


class ConfigError(ValueError):
    """Raised when a date-picker configuration cannot be resolved."""


class Ordering(enum.IntEnum):
    BEFORE = -1
    SAME = 0
    AFTER = 1


@lru_cache(maxsize=32)
def parse_locale(lang: str) -> Locale:
    """Parse ``"en-US"`` / ``"de_CH"`` style locale strings into a Babel Locale."""
    if not isinstance(lang, str) or not lang:
        raise ConfigError(f"Locale must be a non-empty string, got {lang!r}")
    try:
        return Locale.parse(lang.replace("-", "_"))
    except (UnknownLocaleError, ValueError) as err:
        raise ConfigError(f"Unknown locale {lang!r}") from err


def check_unit(unit: str) -> str:
    if unit not in UNITS:
        raise ConfigError(f"Unknown unit {unit!r}, expected one of {UNITS}")
    return unit


@dataclass(frozen=True, order=True)
class DateValue:
    """A calendar date at day precision.

    Equality and ordering come from the ``(year, month, day)`` fields, so
    two values built from the same fields are interchangeable.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Validate through the stdlib so impossible dates never exist.
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError) as err:
            raise ConfigError(
                f"Invalid date {self.year!r}-{self.month!r}-{self.day!r}"
            ) from err

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_fields(cls, year: int, month: int = 1, day: int = 1) -> DateValue:
        for name, value in (("year", year), ("month", month), ("day", day)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"Date field {name!r} must be an int, got {value!r}")
        return cls(year, month, day)

    @classmethod
    def from_partial(cls, partial: DatePartial) -> DateValue:
        """Build from a ``{year, month?, day?}`` mapping; missing fields default to 1."""
        if not isinstance(partial, Mapping):
            raise ConfigError(f"Expected a partial date mapping, got {partial!r}")
        unknown = set(partial) - set(_PARTIAL_KEYS)
        if unknown:
            raise ConfigError(f"Unknown partial date keys: {sorted(unknown)}")
        if "year" not in partial:
            raise ConfigError(f"Partial date {dict(partial)!r} has no 'year'")
        return cls.from_fields(
            partial["year"], partial.get("month", 1), partial.get("day", 1),
        )

    @classmethod
    def from_date(cls, d: date) -> DateValue:
        return cls(d.year, d.month, d.day)

    @classmethod
    def today(cls, clock: Callable[[], date] = date.today) -> DateValue:
        return cls.from_date(clock())

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    # ------------------------------------------------------------------
    # Granularity operations
    # ------------------------------------------------------------------
    def truncate_to(self, unit: Unit) -> DateValue:
        check_unit(unit)
        if unit == "year":
            return DateValue(self.year, 1, 1)
        if unit == "month":
            return DateValue(self.year, self.month, 1)
        return self

    def end_of(self, unit: Unit) -> DateValue:
        """Return the last day of the enclosing unit (already at day precision)."""
        check_unit(unit)
        if unit == "year":
            return DateValue(self.year, 12, 31)
        if unit == "month":
            return DateValue(self.year, self.month,
                             calendar.monthrange(self.year, self.month)[1])
        return self

    def add_months(self, n: int) -> DateValue:
        """Shift by *n* months, clamping the day to the target month's length."""
        year, month0 = divmod(self.year * 12 + (self.month - 1) + n, 12)
        month = month0 + 1
        last_day = calendar.monthrange(year, month)[1]
        return DateValue(year, month, min(self.day, last_day))

    def add_years(self, n: int) -> DateValue:
        return self.add_months(12 * n)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def compare(self, other: DateValue, unit: Unit = "day") -> Ordering:
        a = self.truncate_to(unit)
        b = other.truncate_to(unit)
        if a < b:
            return Ordering.BEFORE
        if a > b:
            return Ordering.AFTER
        return Ordering.SAME

    def has_same(self, other: DateValue, unit: Unit) -> bool:
        return self.compare(other, unit) is Ordering.SAME

    def same_month(self, other: DateValue) -> bool:
        """True when both dates fall in the same month of the same year."""
        return self.has_same(other, "month")

    def same_year(self, other: DateValue) -> bool:
        return self.year == other.year

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    def month_name(self, locale: Locale | str) -> str:
        if isinstance(locale, str):
            locale = parse_locale(locale)
        return get_month_names("wide", context="stand-alone", locale=locale)[self.month]

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()
