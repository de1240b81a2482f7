from datetime import date

import pytest

from src.school_reports.school_reports.core.exceptions import InvalidPeriod, ValidationError
from src.school_reports.school_reports.periods.calendar import AcademicCalendar, current_school_year
from src.school_reports.school_reports.periods.model import BimesterPeriod, DateRange, MonthPeriod
from src.school_reports.school_reports.periods.resolver import DateRangeResolver, period_from_args


def test_month_leap_february_has_29_days():
    r = DateRangeResolver().resolve(MonthPeriod(year=2024, month=2))

    assert r.start == date(2024, 2, 1)
    assert r.end == date(2024, 2, 29)
    assert r.day_count == 29


def test_month_common_february_and_december():
    resolver = DateRangeResolver()

    assert resolver.resolve(MonthPeriod(year=2023, month=2)).day_count == 28
    dec = resolver.resolve(MonthPeriod(year=2024, month=12))
    assert dec.end == date(2024, 12, 31)
    assert dec.day_count == 31


@pytest.mark.parametrize("month", [0, 13, -1])
def test_month_out_of_range_is_invalid(month):
    with pytest.raises(InvalidPeriod):
        DateRangeResolver().resolve(MonthPeriod(year=2024, month=month))


def test_invalid_period_is_a_validation_error():
    with pytest.raises(ValidationError):
        DateRangeResolver().resolve(MonthPeriod(year=2024, month=13))


def test_first_bimester_of_2024():
    r = DateRangeResolver().resolve(BimesterPeriod(school_year=2024, number=1))

    assert r.start == date(2024, 3, 1)
    assert r.end == date(2024, 5, 15)
    assert r.day_count == 76


def test_bimesters_are_contiguous():
    windows = AcademicCalendar().all_bimesters(2024)

    for previous, current in zip(windows, windows[1:]):
        assert (current.start - previous.end).days == 1
    assert windows[-1].end == date(2024, 12, 31)


@pytest.mark.parametrize("number", [0, 5])
def test_bimester_out_of_range_is_invalid(number):
    with pytest.raises(InvalidPeriod):
        DateRangeResolver().resolve(BimesterPeriod(school_year=2024, number=number))


def test_inverted_calendar_override_is_invalid():
    calendar = AcademicCalendar(overrides={(2024, 2): (date(2024, 7, 31), date(2024, 5, 16))})

    with pytest.raises(InvalidPeriod):
        DateRangeResolver(calendar).resolve(BimesterPeriod(school_year=2024, number=2))


def test_calendar_override_is_used():
    calendar = AcademicCalendar(overrides={(2025, 1): (date(2025, 3, 10), date(2025, 5, 9))})

    r = DateRangeResolver(calendar).resolve(BimesterPeriod(school_year=2025, number=1))

    assert (r.start, r.end) == (date(2025, 3, 10), date(2025, 5, 9))


def test_day_count_matches_inclusive_span():
    r = DateRange.between(date(2024, 3, 1), date(2024, 3, 1))

    assert r.day_count == 1
    assert r.day_number(date(2024, 3, 1)) == 1
    assert r.day_number(date(2024, 3, 2)) is None
    assert [d for d, _ in r.days()] == [1]


def test_bimester_for_vacation_day_is_none():
    calendar = AcademicCalendar()

    assert calendar.bimester_for(date(2024, 5, 16)).number == 2
    assert calendar.bimester_for(date(2025, 1, 20)) is None


def test_january_belongs_to_previous_school_year():
    assert current_school_year(date(2025, 1, 10)) == 2024
    assert current_school_year(date(2025, 3, 1)) == 2025


def test_period_from_args_month_forms():
    today = date(2024, 6, 15)

    assert period_from_args({}, today=today) == MonthPeriod(year=2024, month=6)
    assert period_from_args({"year": "2024", "month": "2"}, today=today) == MonthPeriod(year=2024, month=2)
    assert period_from_args({"month": "2023-11"}, today=today) == MonthPeriod(year=2023, month=11)


def test_period_from_args_bimester_defaults_to_current_school_year():
    period = period_from_args({"period": "bimestre", "bimester": "3"}, today=date(2025, 2, 1))

    assert period == BimesterPeriod(school_year=2024, number=3)


@pytest.mark.parametrize(
    "args",
    [
        {"period": "weekly"},
        {"period": "bimester"},
        {"year": "abc", "month": "2"},
        {"month": "2024-xx"},
    ],
)
def test_period_from_args_rejects_bad_input(args):
    with pytest.raises(InvalidPeriod):
        period_from_args(args, today=date(2024, 6, 15))
