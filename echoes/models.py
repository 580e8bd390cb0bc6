"""
Data model for the activity calendar grid.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union


class HeatmapError(Exception):
    """Base exception for heatmap pipeline errors."""

    pass


class InvalidRangeError(HeatmapError):
    """Raised when the requested window ends before it starts."""

    pass


class InvalidObservationError(HeatmapError):
    """Raised when an observation has a malformed date or count."""

    pass


@dataclass(frozen=True)
class Day:
    """A real calendar day in the grid."""

    date: date
    count: int
    intensity: Optional[int] = None  # None until classified

    @property
    def is_spacer(self) -> bool:
        return False


@dataclass(frozen=True)
class Spacer:
    """Placeholder cell that aligns a month's first day to its weekday column."""

    date: None = field(default=None, init=False)
    count: int = field(default=-1, init=False)
    intensity: int = field(default=-1, init=False)

    @property
    def is_spacer(self) -> bool:
        return True


SPACER = Spacer()

Cell = Union[Day, Spacer]
Week = tuple[Cell, ...]


@dataclass(frozen=True)
class Month:
    """One month column group of the heatmap."""

    year: int
    month: int
    label: str  # Short month name, e.g. "Jan"
    weeks: tuple[Week, ...]


@dataclass(frozen=True)
class CalendarGrid:
    """The complete heatmap structure for one requested window."""

    start: date
    end: date
    months: tuple[Month, ...]
    thresholds: tuple[float, ...] = ()
    total: Optional[int] = None


def cell_to_dict(cell: Cell) -> dict:
    """Serialize a grid cell, keeping the -1 sentinel encoding for spacers."""
    if cell.is_spacer:
        return {"date": None, "count": -1, "intensity": -1, "spacer": True}
    return {
        "date": cell.date.isoformat(),
        "count": cell.count,
        "intensity": cell.intensity,
        "spacer": False,
    }


def grid_to_dict(grid: CalendarGrid) -> dict:
    """
    Convert a CalendarGrid into JSON-ready primitives.

    Args:
        grid: The grid produced by build_calendar_grid()

    Returns:
        Dictionary with:
            - start / end: Requested window as ISO dates
            - total: Pass-through total (or None)
            - thresholds: The nine log-scale cutoffs (empty when no activity)
            - months: List of {year, month, label, weeks}, where weeks is a
              list of cell lists
    """
    return {
        "start": grid.start.isoformat(),
        "end": grid.end.isoformat(),
        "total": grid.total,
        "thresholds": list(grid.thresholds),
        "months": [
            {
                "year": month.year,
                "month": month.month,
                "label": month.label,
                "weeks": [[cell_to_dict(cell) for cell in week] for week in month.weeks],
            }
            for month in grid.months
        ],
    }
