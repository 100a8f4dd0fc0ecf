#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import datetime


__all__ = [
    'days_in_month',
    'shift_month',
    'shift_year',
    'month_start',
    'month_end',
    'months_worked',
    'full_years',
    'vacation_months',
]


_days_in_month = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

def days_in_month(year:int, month:int) -> int:
    if month == 2:
        return 29 if year % 4 == 0 and (year % 100 != 0 or year % 400 == 0) else 28
    else:
        return _days_in_month[month - 1]


def shift_year(date:datetime.date, years:int=1) -> datetime.date:
    assert isinstance(date, datetime.date)
    year = date.year + years
    day = min(date.day, days_in_month(year, date.month))
    return date.replace(year=year, day=day)


def shift_month(date:datetime.date, months:int=1) -> datetime.date:
    assert isinstance(date, datetime.date)
    year_month = date.year*12 + date.month - 1 + months
    year = year_month // 12
    month = year_month % 12 + 1
    day = min(date.day, days_in_month(year, month))
    return date.replace(year=year, month=month, day=day)


def month_start(date:datetime.date) -> datetime.date:
    return date.replace(day=1)


def month_end(date:datetime.date) -> datetime.date:
    return date.replace(day=days_in_month(date.year, date.month))


# A month counts when at least 15 days of it were worked (Lei 4.090/62, art. 1º, § 2º)
min_days = 15


def months_worked(start:datetime.date, end:datetime.date) -> int:
    """Calendar months between start and end (inclusive) with at least 15 worked days."""

    if end < start:
        return 0

    count = 0
    date = month_start(start)
    while date <= end:
        first = max(start, date)
        last = min(end, month_end(date))
        if (last - first).days + 1 >= min_days:
            count += 1
        date = shift_month(date)
    return count


def full_years(start:datetime.date, end:datetime.date) -> int:
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return max(years, 0)


def vacation_months(admission:datetime.date, end:datetime.date) -> int:
    """Twelfths of vacation accrued in the current acquisition period.

    The acquisition period restarts on every anniversary of the admission;
    a trailing fraction of at least 15 days counts as a whole month.
    """

    if end < admission:
        return 0

    period_start = shift_year(admission, full_years(admission, end))
    assert period_start <= end

    months = 0
    while shift_month(period_start, months + 1) <= end + datetime.timedelta(days=1):
        months += 1
    remainder = (end - shift_month(period_start, months)).days + 1
    if remainder >= min_days:
        months += 1
    return min(months, 12)
