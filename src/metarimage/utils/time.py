# src/metarimage/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current wall-clock moment."""

    def now(self) -> datetime:
        """Return the current moment as a timezone-aware datetime."""
        ...


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return TimeUtils.now_localized()


class FixedClock:
    """Clock frozen at a given moment, for tests and reproducible renders."""

    def __init__(self, moment: datetime) -> None:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with dates and times:
    - Timezone lookups
    - Calendar arithmetic that tolerates out-of-range components
    - Zero-padded clock formatting
    - Current time retrieval with proper timezone handling
    """

    @staticmethod
    def get_timezone(timezone_name: str = "UTC") -> tzinfo:
        """Resolve an IANA timezone name.

        Args:
            timezone_name: Timezone name

        Returns:
            ZoneInfo for the name
        """
        return ZoneInfo(timezone_name)

    @staticmethod
    def now_localized() -> datetime:
        """Get current datetime with local timezone.

        Returns:
            Current datetime with local timezone
        """
        return datetime.now(UTC).astimezone()

    @staticmethod
    def previous_month(year: int, month: int) -> tuple[int, int]:
        """Return the (year, month) before the given one.

        Args:
            year: Calendar year
            month: Calendar month, 1-12

        Returns:
            Tuple of (year, month); January rolls back to December
        """
        if month == 1:
            return year - 1, 12
        return year, month - 1

    @staticmethod
    def utc_from_components(
        year: int, month: int, day: int, hour: int = 0, minute: int = 0
    ) -> datetime:
        """Build a UTC datetime, letting overflowing components roll forward.

        Day 31 of a 30-day month becomes the 1st of the next month, hour 24
        becomes midnight of the next day, and so on.

        Args:
            year: Calendar year
            month: Calendar month, 1-12
            day: Day of month, counted from 1
            hour: Hour of day
            minute: Minute of hour

        Returns:
            Timezone-aware datetime in UTC
        """
        start = datetime(year, month, 1, tzinfo=UTC)
        return start + timedelta(days=day - 1, hours=hour, minutes=minute)

    @staticmethod
    def format_clock(dt: datetime, tz: tzinfo | None = None) -> str:
        """Format the wall-clock hour and minute of ``dt`` as ``HH:MM``.

        Args:
            dt: Timezone-aware datetime
            tz: Timezone whose wall clock is shown (default: dt's own)

        Returns:
            Zero-padded 24-hour time
        """
        if tz is not None:
            dt = dt.astimezone(tz)
        return f"{dt.hour:02d}:{dt.minute:02d}"
