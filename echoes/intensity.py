"""
Intensity classifier for the activity heatmap.

Buckets each day's count into a color level 0-9 using percentile thresholds
computed on a log10 scale over the nonzero counts in the window.
"""

import math
from bisect import bisect_right
from dataclasses import replace
from typing import Sequence

from echoes.logging_config import get_logger
from echoes.models import Day, InvalidObservationError

logger = get_logger(__name__)

PERCENTILES = (10, 25, 40, 55, 70, 80, 88, 94, 98)
MAX_INTENSITY = 9


def log_scale(count: int) -> float:
    """Map a count onto the log scale used for thresholds."""
    return math.log10(count + 1)


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Return the nearest-rank percentile of an ascending sequence.

    The rank is ceil(p / 100 * n) - 1, clamped to the valid index range.

    Raises:
        ValueError: If sorted_values is empty
    """
    if not sorted_values:
        raise ValueError("percentile() requires at least one value")

    index = math.ceil((p / 100) * len(sorted_values)) - 1
    index = min(max(index, 0), len(sorted_values) - 1)
    return sorted_values[index]


def compute_thresholds(counts: Sequence[int]) -> tuple[float, ...]:
    """
    Compute the nine log-scale thresholds for a window.

    Args:
        counts: All day counts in the window (zeros are ignored)

    Returns:
        Tuple of nine ascending thresholds, or an empty tuple when there
        are no nonzero counts
    """
    logs = sorted(log_scale(c) for c in counts if c > 0)
    if not logs:
        return ()
    return tuple(percentile(logs, p) for p in PERCENTILES)


def classify_count(count: int, thresholds: Sequence[float]) -> int:
    """
    Classify a single count against precomputed thresholds.

    Args:
        count: Non-negative day count
        thresholds: Output of compute_thresholds()

    Returns:
        0 for no activity, otherwise 1 plus the number of the first eight
        thresholds at or below the count's log value. A value tied with a
        threshold lands in the bucket above it, so the largest count in the
        window is always 9. The 98th percentile never opens a bucket of its
        own.

    Note:
        This is deliberately not "the smallest k with v <= t_k", which would
        put a lone value (or the window maximum on a tie) in bucket 1.
    """
    if count < 0:
        raise InvalidObservationError(f"Negative count: {count}")
    if count == 0 or not thresholds:
        return 0

    level = 1 + bisect_right(thresholds[:-1], log_scale(count))
    return min(level, MAX_INTENSITY)


def classify_days(days: Sequence[Day]) -> tuple[list[Day], tuple[float, ...]]:
    """
    Assign an intensity to every day.

    Args:
        days: Unclassified days from build_range()

    Returns:
        Tuple of (classified days, thresholds). Input days are not modified.
    """
    thresholds = compute_thresholds([day.count for day in days])

    if thresholds:
        logger.debug(
            "Percentile thresholds: %s",
            ", ".join(f"p{p}={t:.3f}" for p, t in zip(PERCENTILES, thresholds)),
        )
    else:
        logger.debug("No activity in %d days, all intensities are 0", len(days))

    classified = [
        replace(day, intensity=classify_count(day.count, thresholds)) for day in days
    ]
    return classified, thresholds
