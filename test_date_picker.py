from datetime import date

import pytest

from calendar_navigation import Granularity
from date_picker import DatePicker
from date_value import ConfigError, DateValue


def dv(y, m, d):
    return DateValue(y, m, d)


def test_min_now_starts_today(clock_at):
    picker = DatePicker(min="now", max={"day": 31, "month": 12, "year": 2100},
                        clock=clock_at(2025, 3, 10))
    assert picker.selected_date == dv(2025, 3, 10)
    assert picker.granularity is Granularity.DAY


def test_future_min_starts_on_min(clock_at):
    picker = DatePicker(min={"day": 1, "month": 1, "year": 2030}, clock=clock_at(2025, 3, 10))
    assert picker.selected_date == dv(2030, 1, 1)


def test_fixed_partial_outside_today_starts_on_partial(clock_at):
    picker = DatePicker(fixed={"year": 2019, "month": 8}, clock=clock_at(2025, 3, 10))
    assert picker.selected_date == dv(2019, 8, 1)
    assert not picker.controller.can_toggle_view


@pytest.mark.parametrize(
    "options",
    [
        {"min": {"year": 2020}, "max": {"year": 2019}},
        {"fixed": "decade"},
        {"lang": "zz-ZZZZ"},
        {"start": {"year": 2024, "month": 2, "day": 30}},
        {"first_weekday": 7},
    ],
)
def test_invalid_configuration_raises_eagerly(options):
    with pytest.raises(ConfigError):
        DatePicker(**options)


def test_header_label_per_granularity(clock_at):
    picker = DatePicker(lang="de-DE", clock=clock_at(2024, 3, 5))
    assert picker.header_label() == "März 2024"
    picker.toggle_view()
    assert picker.header_label() == "2024"


def test_click_day_selects_and_calls_back(clock_at):
    picked = []
    picker = DatePicker(min={"year": 2024, "month": 6, "day": 10},
                        on_date_click=picked.append, clock=clock_at(2024, 6, 12))
    cells = [c for row in picker.day_cells() for c in row if c is not None]
    before = next(c for c in cells if c.date == dv(2024, 6, 9))
    target = next(c for c in cells if c.date == dv(2024, 6, 20))

    assert picker.click_day(before) is False
    assert picker.click_day(target) is True
    assert picked == [dv(2024, 6, 20)]
    assert picker.selected_date == dv(2024, 6, 20)


def test_click_month_switches_back_to_day_view(clock_at):
    picked = []
    picker = DatePicker(on_date_click=picked.append, clock=clock_at(2024, 6, 12))
    picker.toggle_view()
    assert picker.click_month(picker.month_cells()[1])
    assert picker.granularity is Granularity.DAY
    assert picker.selected_date == dv(2024, 2, 1)
    assert picked == []


def test_months_only_click_invokes_callback(clock_at):
    picked = []
    picker = DatePicker(months_only=True, on_date_click=picked.append,
                        clock=clock_at(2024, 6, 12))
    assert picker.granularity is Granularity.MONTH
    assert picker.click_month(picker.month_cells()[3])
    assert picked == [dv(2024, 4, 1)]
    assert picker.granularity is Granularity.MONTH
    assert picker.selected_date == dv(2024, 6, 12)


def test_disabled_month_click_is_ignored(clock_at):
    picked = []
    picker = DatePicker(fixed={"year": 2024, "month": 6}, months_only=True,
                        on_date_click=picked.append, clock=clock_at(2024, 6, 12))
    assert picker.click_month(picker.month_cells()[0]) is False
    assert picked == []


def test_reconfigure_keeps_selection(clock_at):
    picker = DatePicker(clock=clock_at(2024, 6, 12))
    picker.step_forward()
    picker.reconfigure(max={"year": 2024, "month": 12, "day": 31}, lang="fr-FR")
    assert picker.selected_date == dv(2024, 7, 12)
    assert picker.bounds.max_date == dv(2024, 12, 31)
    assert picker.header_label() == "juillet 2024"


def test_failed_reconfigure_leaves_previous_configuration(clock_at):
    picker = DatePicker(lang="en-US", clock=clock_at(2024, 6, 12))
    old_bounds = picker.bounds
    with pytest.raises(ConfigError):
        picker.reconfigure(min={"year": 2030}, max="now")
    with pytest.raises(ConfigError):
        picker.reconfigure(colour="red")
    assert picker.bounds == old_bounds
    assert picker.header_label() == "June 2024"


def test_instances_keep_their_own_locale(clock_at):
    clock = clock_at(2024, 1, 15)
    en = DatePicker(lang="en-US", clock=clock)
    de = DatePicker(lang="de-DE", clock=clock)
    assert en.header_label() == "January 2024"
    assert de.header_label() == "Januar 2024"
    assert en.weekday_names()[0] == "Mon"


def test_now_is_read_on_every_call():
    today = [date(2024, 6, 30)]
    picker = DatePicker(clock=lambda: today[0])
    picker.toggle_view()
    assert [c.date.month for c in picker.month_cells() if c.highlighted] == [6]
    today[0] = date(2024, 7, 1)
    assert [c.date.month for c in picker.month_cells() if c.highlighted] == [7]


def test_fixed_year_navigation(clock_at):
    picker = DatePicker(fixed="year", start={"year": 2024, "month": 6},
                        clock=clock_at(2024, 6, 15))
    assert picker.step_backward()
    assert picker.selected_date == dv(2024, 5, 1)
    for _ in range(10):
        picker.step_backward()
    assert picker.selected_date == dv(2024, 1, 1)
    assert not picker.controller.can_step_backward


def test_refresh_now_follows_the_clock_for_fixed_units():
    today = [date(2024, 6, 30)]
    picker = DatePicker(fixed="month", clock=lambda: today[0])
    assert picker.bounds.min_date == dv(2024, 6, 1)

    today[0] = date(2024, 7, 1)
    picker.refresh_now()
    assert (picker.bounds.min_date, picker.bounds.max_date) == (dv(2024, 7, 1), dv(2024, 7, 31))
    assert picker.selected_date == dv(2024, 7, 1)
    assert not picker.controller.can_step_backward


def test_refresh_now_moves_now_sentinel_and_keeps_valid_selection():
    today = [date(2024, 6, 10)]
    picker = DatePicker(min="now", clock=lambda: today[0])
    picker.step_forward()
    today[0] = date(2024, 6, 11)
    picker.refresh_now()
    assert picker.bounds.min_date == dv(2024, 6, 11)
    assert picker.selected_date == dv(2024, 7, 10)


def test_reconfigure_to_months_only_switches_to_month_view(clock_at):
    picked = []
    picker = DatePicker(on_date_click=picked.append, clock=clock_at(2024, 6, 12))
    assert picker.granularity is Granularity.DAY
    picker.reconfigure(months_only=True)
    assert picker.granularity is Granularity.MONTH
    assert picker.click_month(picker.month_cells()[0])
    assert picked == [dv(2024, 1, 1)]
    assert picker.granularity is Granularity.MONTH
