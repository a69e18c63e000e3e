from datetime import date

import pytest


@pytest.fixture
def clock_at():
    """Return a factory for fixed ``date.today`` replacements."""

    def _make(year: int, month: int, day: int):
        return lambda: date(year, month, day)

    return _make


@pytest.fixture(autouse=True)
def fresh_locale_data():
    """Start every test with empty Babel and locale-parse caches.

    Some Babel releases leak month names between locales loaded in the same
    process, which would make label assertions depend on test order.
    """
    from babel import localedata

    from date_value import parse_locale

    parse_locale.cache_clear()
    localedata._cache.clear()
    yield
    parse_locale.cache_clear()
    localedata._cache.clear()
