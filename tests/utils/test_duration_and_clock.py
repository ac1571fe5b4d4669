"""
Tests for clocks and duration helpers.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from attempt_tracker.errors import DurationParseError
from attempt_tracker.utils.time import (
    ManualClock, SystemClock, elapsed_since, format_duration, parse_duration
)


class TestParseDuration:
    """Test parse_duration function."""

    def test_hours_minutes_seconds(self):
        """01:02:03 is 3723000 ms."""
        assert parse_duration("01:02:03") == 3_723_000

    def test_zero(self):
        """00:00:00 is zero."""
        assert parse_duration("00:00:00") == 0

    def test_large_hours(self):
        """Hours are not capped."""
        assert parse_duration("100:00:00") == 360_000_000

    def test_surrounding_whitespace(self):
        """Leading and trailing whitespace is ignored."""
        assert parse_duration(" 00:00:01 ") == 1_000

    @pytest.mark.parametrize("value", ["ab:00:00", "00:0b:00", "00:00:1.5", "00:00", "", ":::", "+1:00:00"])
    def test_non_numeric_components_raise(self, value):
        """Anything that is not three digit groups is fatal."""
        with pytest.raises(DurationParseError) as exc_info:
            parse_duration(value)

        assert exc_info.value.raw_value == value
        assert exc_info.value.recoverable is False

    @pytest.mark.parametrize("value", ["01:02\n:03", "\u0660\u0661:00:00", "00:00:\uff11"])
    def test_only_ascii_digit_components(self, value):
        """Embedded newlines and non-ASCII digits are rejected."""
        with pytest.raises(DurationParseError):
            parse_duration(value)

    def test_none_raises(self):
        """Missing duration is fatal."""
        with pytest.raises(DurationParseError):
            parse_duration(None)


class TestFormatDuration:
    """Test format_duration function."""

    @pytest.mark.parametrize("ms,expected", [
        (0, "00:00:00"),
        (999, "00:00:00"),
        (3_723_000, "01:02:03"),
        (3_723_999, "01:02:03"),
        (108_000_000, "30:00:00"),
        (-5, "00:00:00"),
    ])
    def test_format(self, ms, expected):
        """Whole seconds, hours unwrapped."""
        assert format_duration(ms) == expected

    def test_parse_accepts_formatted_output(self):
        """A rendered duration parses back to its whole seconds."""
        assert parse_duration(format_duration(3_723_456)) == 3_723_000


class TestElapsedSince:
    """Test elapsed_since function."""

    def test_adds_baseline(self):
        """Running time plus baseline."""
        assert elapsed_since(1_000, 4_000, 500) == 3_500

    def test_clock_behind_start(self):
        """A clock behind the start contributes zero."""
        assert elapsed_since(5_000, 4_000, 500) == 500


class TestClocks:
    """Test clock implementations."""

    def test_system_clock_uses_utc_now(self):
        """SystemClock returns epoch milliseconds of datetime.now(utc)."""
        with patch('attempt_tracker.utils.time.datetime') as mock_datetime:
            mock_datetime.now.return_value = datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

            assert SystemClock().now_ms() == 1_672_574_400_000
            mock_datetime.now.assert_called_once_with(timezone.utc)

    def test_manual_clock(self):
        """ManualClock advances and can be set."""
        clock = ManualClock(100)
        assert clock.advance(50) == 150
        clock.set(10)
        assert clock.now_ms() == 10

    def test_manual_clock_rejects_backwards(self):
        """advance() does not accept negative deltas."""
        with pytest.raises(ValueError):
            ManualClock().advance(-1)
