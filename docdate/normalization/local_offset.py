"""
Local UTC offset providers.

The parsers only consult the local clock when a date carries no timezone
of its own. The clock is passed in as a LocalOffsetProvider so tests and
batch jobs can pin it to a fixed offset instead of the host's timezone.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from docdate.config import Config
from docdate.normalization.timestamp import TimezoneOffset

logger = logging.getLogger(__name__)

OFFSET_PATTERN = re.compile(r"^([+-])(\d{2}):(\d{2})$")


class LocalOffsetProvider(ABC):
    """Reports the local UTC offset at a point in time"""

    @abstractmethod
    def offset_for(self, moment: datetime) -> TimezoneOffset:
        """
        Offset of local wall-clock time from UTC at the given instant.

        Args:
            moment: Naive datetimes are read as local wall-clock time,
                aware ones as the instant they denote

        Returns:
            Signed TimezoneOffset, positive when local time is ahead of UTC
        """
        pass


class SystemLocalOffset(LocalOffsetProvider):
    """Uses the timezone configured on the host"""

    def offset_for(self, moment: datetime) -> TimezoneOffset:
        local = moment.astimezone()
        return TimezoneOffset.from_timedelta(local.utcoffset())

    def __repr__(self) -> str:
        return "SystemLocalOffset()"


class FixedLocalOffset(LocalOffsetProvider):
    """Same offset at every instant"""

    def __init__(self, minutes: int = 0):
        self.minutes = minutes
        self._offset = TimezoneOffset.from_minutes(minutes)

    @classmethod
    def parse(cls, text: str) -> "FixedLocalOffset":
        """
        Build a provider from a ±HH:MM string.

        Raises:
            ValueError: if text is not a ±HH:MM offset
        """
        match = OFFSET_PATTERN.match(text.strip()) if text else None
        if not match:
            raise ValueError(f"Invalid UTC offset: {text!r}")

        sign, hours, minutes = match.groups()
        if int(minutes) >= 60:
            raise ValueError(f"Invalid UTC offset minutes: {text!r}")

        total = int(hours) * 60 + int(minutes)
        return cls(total if sign == "+" else -total)

    def offset_for(self, moment: datetime) -> TimezoneOffset:
        return self._offset

    def __repr__(self) -> str:
        return f"FixedLocalOffset({self._offset.render()})"


# Global instance (singleton)
_local_offset_provider: Optional[LocalOffsetProvider] = None


def get_local_offset_provider() -> LocalOffsetProvider:
    """Get global LocalOffsetProvider, honouring Config.LOCAL_UTC_OFFSET"""
    global _local_offset_provider
    if _local_offset_provider is None:
        if Config.LOCAL_UTC_OFFSET:
            _local_offset_provider = FixedLocalOffset.parse(Config.LOCAL_UTC_OFFSET)
        else:
            _local_offset_provider = SystemLocalOffset()
        logger.info(f"Local offset provider: {_local_offset_provider!r}")
    return _local_offset_provider


def reset_local_offset_provider() -> None:
    """Drop the cached provider so the next lookup re-reads Config"""
    global _local_offset_provider
    _local_offset_provider = None
