"""
Tests for the range builder module.
"""

from datetime import date, datetime, timedelta

import pytest

from echoes.models import InvalidObservationError, InvalidRangeError
from echoes.range_builder import (
    build_range,
    first_monday,
    index_observations,
    one_year_window,
    parse_date,
)


class TestParseDate:
    """Tests for parse_date."""

    def test_parses_iso_string(self):
        """ISO strings become dates."""
        assert parse_date("2024-01-03") == date(2024, 1, 3)

    def test_passes_dates_through(self):
        """Date objects are returned unchanged."""
        assert parse_date(date(2024, 1, 3)) == date(2024, 1, 3)

    def test_datetime_is_truncated_to_date(self):
        """Datetimes are reduced to their calendar date."""
        assert parse_date(datetime(2024, 1, 3, 23, 59)) == date(2024, 1, 3)

    def test_rejects_garbage(self):
        """Malformed strings raise InvalidObservationError."""
        with pytest.raises(InvalidObservationError):
            parse_date("not-a-date")

    def test_rejects_basic_iso_format(self):
        """Compact YYYYMMDD dates are not accepted."""
        with pytest.raises(InvalidObservationError):
            parse_date("20240103")

    def test_rejects_iso_week_format(self):
        """ISO week dates are not accepted."""
        with pytest.raises(InvalidObservationError):
            parse_date("2024-W01-3")

    def test_rejects_missing_value(self):
        """None is not a date."""
        with pytest.raises(InvalidObservationError):
            parse_date(None)


class TestIndexObservations:
    """Tests for index_observations."""

    def test_builds_lookup(self):
        """Observations are keyed by date."""
        lookup = index_observations(
            [{"date": "2024-01-07", "count": 50}, {"date": "2024-01-03", "count": 5}]
        )
        assert lookup == {date(2024, 1, 3): 5, date(2024, 1, 7): 50}

    def test_empty_history(self):
        """No observations gives an empty lookup."""
        assert index_observations([]) == {}

    def test_duplicate_date_last_wins(self):
        """A repeated date keeps the last value in input order."""
        lookup = index_observations(
            [{"date": "2024-01-03", "count": 5}, {"date": "2024-01-03", "count": 2}]
        )
        assert lookup == {date(2024, 1, 3): 2}

    def test_duplicate_date_logs_warning(self, caplog):
        """Replacing a duplicate is logged."""
        with caplog.at_level("WARNING", logger="echoes.range_builder"):
            index_observations(
                [{"date": "2024-01-03", "count": 5}, {"date": "2024-01-03", "count": 2}]
            )
        assert "Duplicate observation for 2024-01-03" in caplog.text

    def test_negative_count_rejected(self):
        """Negative counts are a data error."""
        with pytest.raises(InvalidObservationError, match="Negative count"):
            index_observations([{"date": "2024-01-03", "count": -1}])

    def test_non_integer_count_rejected(self):
        """Counts must be integers."""
        with pytest.raises(InvalidObservationError):
            index_observations([{"date": "2024-01-03", "count": "5"}])
        with pytest.raises(InvalidObservationError):
            index_observations([{"date": "2024-01-03", "count": True}])

    def test_bad_date_rejected(self):
        """Malformed dates are a data error."""
        with pytest.raises(InvalidObservationError):
            index_observations([{"date": "2024-13-01", "count": 1}])


class TestOneYearWindow:
    """Tests for one_year_window."""

    def test_one_year_back(self):
        """Start is the same calendar day one year earlier."""
        assert one_year_window(date(2024, 10, 19)) == (
            date(2023, 10, 19),
            date(2024, 10, 19),
        )

    def test_leap_day_rolls_forward(self):
        """Feb 29 has no counterpart, so the window starts Mar 1."""
        assert one_year_window(date(2024, 2, 29))[0] == date(2023, 3, 1)


class TestBuildRange:
    """Tests for build_range."""

    def test_first_monday_of_monday_is_itself(self):
        """A Monday start is not padded."""
        assert first_monday(date(2024, 1, 1)) == date(2024, 1, 1)

    def test_first_monday_of_sunday(self):
        """A Sunday start pads back six days."""
        assert first_monday(date(2024, 1, 7)) == date(2024, 1, 1)

    def test_range_starts_on_monday_start(self):
        """A Monday start covers exactly [start, end]."""
        days = build_range(date(2024, 1, 1), date(2024, 1, 10), {})

        assert len(days) == 10
        assert days[0].date == date(2024, 1, 1)
        assert days[-1].date == date(2024, 1, 10)

    def test_padding_crosses_into_previous_month(self):
        """A Thursday Feb 1 start pulls in the last days of January."""
        days = build_range(date(2024, 2, 1), date(2024, 2, 4), {})

        assert [d.date for d in days][:3] == [
            date(2024, 1, 29),
            date(2024, 1, 30),
            date(2024, 1, 31),
        ]
        assert len(days) == 7

    def test_continuity_and_monday_start(self):
        """Adjacent days are exactly one day apart and the first is a Monday."""
        for start in [date(2023, 10, 19) + timedelta(days=i) for i in range(7)]:
            days = build_range(start, date(2024, 10, 19), {})

            assert days[0].date.weekday() == 0
            assert days[0].date <= start
            for prev, nxt in zip(days, days[1:]):
                assert nxt.date - prev.date == timedelta(days=1)

    def test_counts_from_lookup_and_missing_are_zero(self):
        """Counts come from the lookup; absent dates are zero."""
        lookup = {date(2024, 1, 3): 5}
        days = build_range(date(2024, 1, 1), date(2024, 1, 4), lookup)

        assert [d.count for d in days] == [0, 0, 5, 0]

    def test_intensity_left_unset(self):
        """Days are not classified yet."""
        days = build_range(date(2024, 1, 1), date(2024, 1, 2), {date(2024, 1, 1): 3})
        assert all(d.intensity is None for d in days)

    def test_single_day_range(self):
        """start == end is valid."""
        days = build_range(date(2024, 1, 1), date(2024, 1, 1), {})
        assert [d.date for d in days] == [date(2024, 1, 1)]

    def test_end_before_start_rejected(self):
        """Reversed ranges are rejected, not swapped."""
        with pytest.raises(InvalidRangeError):
            build_range(date(2024, 1, 10), date(2024, 1, 1), {})
