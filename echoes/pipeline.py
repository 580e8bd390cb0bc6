"""
Heatmap pipeline: observations -> day range -> intensities -> calendar grid.
"""

from typing import Iterable, Mapping, Optional

from echoes.calendar_grouper import group_by_month
from echoes.intensity import classify_days
from echoes.logging_config import get_logger
from echoes.models import CalendarGrid, InvalidObservationError, InvalidRangeError
from echoes.range_builder import DateLike, build_range, index_observations, parse_date

logger = get_logger(__name__)


def _parse_bound(value: DateLike, name: str):
    try:
        return parse_date(value)
    except InvalidObservationError:
        raise InvalidRangeError(f"Invalid {name} date: {value!r} (expected YYYY-MM-DD)")


def build_calendar_grid(
    history: Iterable[Mapping],
    start: DateLike,
    end: DateLike,
    total: Optional[int] = None,
) -> CalendarGrid:
    """
    Build the heatmap grid for one window.

    Args:
        history: Sparse {"date": "YYYY-MM-DD", "count": int} observations,
            in any order
        start: First date of the window (inclusive)
        end: Last date of the window (inclusive)
        total: Optional precomputed total, passed through untouched

    Returns:
        CalendarGrid with months, thresholds and total

    Raises:
        InvalidRangeError: If end is before start
        InvalidObservationError: On malformed observations
    """
    start_date = _parse_bound(start, "start")
    end_date = _parse_bound(end, "end")

    lookup = index_observations(history)
    days = build_range(start_date, end_date, lookup)
    classified, thresholds = classify_days(days)
    months = group_by_month(classified)

    logger.info(
        "Built heatmap %s..%s: %d days, %d months, %d active",
        start_date.isoformat(),
        end_date.isoformat(),
        len(classified),
        len(months),
        sum(1 for day in classified if day.count > 0),
    )

    return CalendarGrid(
        start=start_date,
        end=end_date,
        months=months,
        thresholds=thresholds,
        total=total,
    )
