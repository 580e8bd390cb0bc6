"""
Build the continuous, Monday-aligned day sequence for the heatmap.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Union

from echoes.logging_config import get_logger
from echoes.models import Day, InvalidObservationError, InvalidRangeError

logger = get_logger(__name__)

DateLike = Union[date, str]


def parse_date(value: DateLike) -> date:
    """
    Parse a calendar date.

    Args:
        value: A date object or an ISO "YYYY-MM-DD" string

    Returns:
        The corresponding date

    Raises:
        InvalidObservationError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Only the extended YYYY-MM-DD form is accepted
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise InvalidObservationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def index_observations(history: Iterable[Mapping]) -> dict[date, int]:
    """
    Build a date -> count lookup from sparse observations.

    Args:
        history: Iterable of {"date": "YYYY-MM-DD", "count": int} mappings

    Returns:
        Dictionary mapping each observed date to its count. When a date
        appears more than once the last entry wins.

    Raises:
        InvalidObservationError: On a malformed date or a negative or
            non-integer count
    """
    lookup: dict[date, int] = {}

    for entry in history:
        day = parse_date(entry.get("date"))
        count = entry.get("count")

        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidObservationError(
                f"Invalid count for {day.isoformat()}: {count!r} (expected an integer)"
            )
        if count < 0:
            raise InvalidObservationError(
                f"Negative count for {day.isoformat()}: {count}"
            )

        if day in lookup:
            logger.warning(
                "Duplicate observation for %s (%d replaced by %d)",
                day.isoformat(),
                lookup[day],
                count,
            )
        lookup[day] = count

    return lookup


def one_year_window(today: date | None = None) -> tuple[date, date]:
    """
    Return the default (start, end) window: one year back through today.

    February 29 rolls forward to March 1 of the previous year.
    """
    if today is None:
        today = date.today()

    try:
        start = today.replace(year=today.year - 1)
    except ValueError:
        start = date(today.year - 1, 3, 1)

    return start, today


def first_monday(start: date) -> date:
    """Return the most recent Monday on or before start."""
    return start - timedelta(days=start.weekday())


def validate_range(start: date, end: date) -> None:
    """Raise InvalidRangeError if end is before start."""
    if end < start:
        raise InvalidRangeError(
            f"Invalid range: end {end.isoformat()} is before start {start.isoformat()}"
        )


def build_range(start: date, end: date, lookup: Mapping[date, int]) -> list[Day]:
    """
    Build the day sequence covering [first Monday on/before start, end].

    Args:
        start: First requested date (inclusive)
        end: Last requested date (inclusive)
        lookup: Date -> count mapping; missing dates count as zero

    Returns:
        List of unclassified Day objects, oldest first, starting on a Monday

    Raises:
        InvalidRangeError: If end is before start
    """
    validate_range(start, end)

    current = first_monday(start)
    days = []

    while current <= end:
        days.append(Day(date=current, count=lookup.get(current, 0)))
        current += timedelta(days=1)

    return days
