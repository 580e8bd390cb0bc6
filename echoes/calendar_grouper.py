"""
Group a classified day sequence into months and Monday-first weeks.
"""

import calendar
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional

from echoes.models import SPACER, Day, Month, Week

SUNDAY = 6


@dataclass(frozen=True)
class _GroupState:
    """Fold accumulator: finished months plus the month and week being built."""

    months: tuple[Month, ...] = ()
    key: Optional[tuple[int, int]] = None  # (year, month) being built
    weeks: tuple[Week, ...] = ()
    week: Week = ()


def month_label(month: int) -> str:
    """Return the short month name, e.g. "Jan"."""
    return calendar.month_abbr[month]


def _close_month(state: _GroupState) -> tuple[Month, ...]:
    """Return state.months with the in-progress month appended, if any."""
    if state.key is None:
        return state.months

    weeks = state.weeks + ((state.week,) if state.week else ())
    if not weeks:
        return state.months

    year, month = state.key
    return state.months + (Month(year, month, month_label(month), weeks),)


def _add_day(state: _GroupState, day: Day) -> _GroupState:
    key = (day.date.year, day.date.month)
    weekday = day.date.weekday()  # Monday=0 .. Sunday=6

    if key != state.key:
        months = _close_month(state)
        weeks: tuple[Week, ...] = ()
        week: Week = (SPACER,) * weekday
    else:
        months, weeks, week = state.months, state.weeks, state.week

    week = week + (day,)

    if weekday == SUNDAY:
        weeks = weeks + (week,)
        week = ()

    return _GroupState(months=months, key=key, weeks=weeks, week=week)


def group_by_month(days: Iterable[Day]) -> tuple[Month, ...]:
    """
    Partition an ordered, continuous day sequence into Month -> Week -> cell.

    A month's first week is front-padded with spacers so its first day sits
    in the right weekday column; its last week may be short. Months only
    appear when at least one of their days is present.

    Args:
        days: Classified days, oldest first

    Returns:
        Tuple of Month objects in calendar order
    """
    final = reduce(_add_day, days, _GroupState())
    return _close_month(final)


def flatten_days(months: Iterable[Month]) -> list[Day]:
    """Return the real days of a grouped grid in order, dropping spacers."""
    return [
        cell
        for month in months
        for week in month.weeks
        for cell in week
        if not cell.is_spacer
    ]
