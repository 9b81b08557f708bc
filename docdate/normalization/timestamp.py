"""
Value types shared by the date parsers.

A parse produces a Timestamp (calendar fields) and a TimezoneOffset
(explicit from the input, or inferred from the local clock). Together
they render the canonical form YYYY-MM-DDTHH:mm:ss followed by Z or ±HH:MM.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta


def pad_number(value: int, width: int = 2) -> str:
    """Zero-pad a non-negative integer to the given width"""
    return str(value).zfill(width)


@dataclass(frozen=True)
class Timestamp:
    """Calendar fields of a parsed date. Not checked for calendar validity."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def to_moment(self) -> datetime:
        """
        Naive datetime for the fields, rolling over values past their range.

        Month 13 becomes January of the next year, Feb 31 becomes early
        March, hour 24 the next day, second 60 the next minute.

        Raises:
            ValueError: if the rolled-over year is outside datetime's range
            OverflowError: if the day or time offsets are too large
        """
        year = self.year + (self.month - 1) // 12
        month = (self.month - 1) % 12 + 1
        return datetime(year, month, 1) + timedelta(
            days=self.day - 1, hours=self.hour, minutes=self.minute, seconds=self.second)

    def render(self) -> str:
        return (f"{pad_number(self.year, 4)}-{pad_number(self.month)}-{pad_number(self.day)}"
                f"T{pad_number(self.hour)}:{pad_number(self.minute)}:{pad_number(self.second)}")


@dataclass(frozen=True)
class TimezoneOffset:
    """
    Signed hours/minutes offset from UTC, or the UTC sentinel.

    The sentinel renders as "Z". A signed offset always renders as ±HH:MM,
    even when it is zero, so "+00:00" stays distinguishable from "Z".
    """

    sign: str = "+"
    hours: int = 0
    minutes: int = 0
    is_utc: bool = False

    @classmethod
    def utc(cls) -> "TimezoneOffset":
        return cls(is_utc=True)

    @classmethod
    def from_minutes(cls, total_minutes: int) -> "TimezoneOffset":
        """Split a signed minute count into sign, hours and minutes"""
        sign = "+" if total_minutes >= 0 else "-"
        hours, minutes = divmod(abs(total_minutes), 60)
        return cls(sign, hours, minutes)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "TimezoneOffset":
        return cls.from_minutes(round(delta.total_seconds() / 60))

    @property
    def total_minutes(self) -> int:
        if self.is_utc:
            return 0
        magnitude = self.hours * 60 + self.minutes
        return magnitude if self.sign == "+" else -magnitude

    def render(self) -> str:
        if self.is_utc:
            return "Z"
        return f"{self.sign}{pad_number(self.hours)}:{pad_number(self.minutes)}"


@dataclass(frozen=True)
class ParsedDate:
    """A Timestamp paired with its timezone"""

    timestamp: Timestamp
    offset: TimezoneOffset

    def isoformat(self) -> str:
        return self.timestamp.render() + self.offset.render()
