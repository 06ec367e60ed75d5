"""Tests for cursor conversion and clocks."""

from datetime import UTC, datetime, timedelta, timezone

from novelsync.data.clock import (
    EPOCH,
    ManualClock,
    SystemClock,
    ensure_utc,
    from_cursor,
    to_cursor,
    truncate_to_millis,
)


class TestCursorConversion:
    """Cursor <-> datetime conversion."""

    def test_none_and_zero_mean_epoch(self) -> None:
        assert from_cursor(None) == EPOCH
        assert from_cursor(0) == EPOCH

    def test_cursor_is_epoch_milliseconds(self) -> None:
        value = datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=UTC)
        assert to_cursor(value) == 1_700_000_000_123
        assert from_cursor(1_700_000_000_123) == value

    def test_sub_millisecond_precision_is_dropped(self) -> None:
        value = datetime(2023, 11, 14, 22, 13, 20, 123999, tzinfo=UTC)
        assert to_cursor(value) == 1_700_000_000_123

    def test_naive_values_are_treated_as_utc(self) -> None:
        naive = datetime(2023, 11, 14, 22, 13, 20)
        assert to_cursor(naive) == 1_700_000_000_000

    def test_other_offsets_are_normalized(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2023, 11, 15, 0, 13, 20, tzinfo=plus_two)
        assert ensure_utc(value) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
        assert to_cursor(value) == 1_700_000_000_000


class TestClocks:
    """Clock implementations."""

    def test_truncate_to_millis(self) -> None:
        value = datetime(2024, 1, 1, 0, 0, 0, 987654, tzinfo=UTC)
        assert truncate_to_millis(value).microsecond == 987000

    def test_system_clock_is_utc_and_millisecond_aligned(self) -> None:
        now = SystemClock().now()
        assert now.tzinfo is not None
        assert now.microsecond % 1000 == 0

    def test_manual_clock_steps(self) -> None:
        clock = ManualClock(start=1000, step_ms=5)
        assert to_cursor(clock.now()) == 1000
        assert to_cursor(clock.now()) == 1005
        assert clock.cursor == 1010

    def test_manual_clock_advance_and_set(self) -> None:
        clock = ManualClock(start=1000)
        clock.advance(250)
        assert to_cursor(clock.now()) == 1250
        clock.set(42)
        assert to_cursor(clock.now()) == 42
        assert to_cursor(clock.now()) == 42
