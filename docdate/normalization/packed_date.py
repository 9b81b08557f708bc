"""
Packed date normalization module.

Normalizes fixed-width PDF dates (D:YYYYMMDDHHmmSSOHH'mm') to
YYYY-MM-DDTHH:mm:ss with an explicit timezone.

Fields are read by position from PACKED_FIELDS. Year, month and day are
required; hour, minute and second fall back to 0. The timezone comes from
a trailing marker when there is one, otherwise from the local clock.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from docdate.config import Config
from docdate.normalization.errors import (
    DateNormalizationError,
    EmptyInputError,
    InvalidInstantError,
    StructuralMismatchError,
)
from docdate.normalization.local_offset import LocalOffsetProvider, get_local_offset_provider
from docdate.normalization.timestamp import ParsedDate, Timestamp, TimezoneOffset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackedField:
    """Position of one calendar field inside the packed digit run"""
    name: str
    start: int
    length: int
    required: bool

    def slice(self, body: str) -> str:
        return body[self.start:self.start + self.length]


PACKED_FIELDS: Tuple[PackedField, ...] = (
    PackedField("year", 0, 4, required=True),
    PackedField("month", 4, 2, required=True),
    PackedField("day", 6, 2, required=True),
    PackedField("hour", 8, 2, required=False),
    PackedField("minute", 10, 2, required=False),
    PackedField("second", 12, 2, required=False),
)

# Trailing timezone marker. Apostrophes are optional.
#   Z, Z00'00'            -> UTC
#   +05'30', -0800, +5    -> signed offset, minutes optional
#   +530                  -> +05:30, unquoted minutes are always two digits
TIMEZONE_MARKER = re.compile(
    r"(?:(?P<utc>Z)(?:\d{1,2}'?(?:\d{1,2}'?)?)?"
    r"|(?P<sign>[+-])(?P<hours>\d{1,2})(?:'(?:(?P<minutes>\d{1,2})'?)?|(?P<bare_minutes>\d{2}))?)$"
)

LEADING_DIGITS = re.compile(r"\d+")


def parse_int(text: str) -> Optional[int]:
    """
    Base-10 integer from the leading digits of text.

    Returns None (not a number) when text does not start with a digit.
    """
    match = LEADING_DIGITS.match(text)
    return int(match.group()) if match else None


class PackedDateParser:
    """Normalizes packed PDF date strings to canonical form"""

    def __init__(self, offset_provider: Optional[LocalOffsetProvider] = None,
                 prefix: Optional[str] = None):
        """
        Args:
            offset_provider: Local clock for dates without a timezone marker.
                Defaults to the global provider.
            prefix: Literal prefix to strip, Config.PACKED_DATE_PREFIX by default
        """
        self.offset_provider = offset_provider or get_local_offset_provider()
        self.prefix = Config.PACKED_DATE_PREFIX if prefix is None else prefix

    def normalize_date(self, date_str: str) -> Optional[str]:
        """
        Normalize a packed date string.

        Returns:
            Canonical date string, or None if the input is not a packed date
        """
        try:
            return self.parse(date_str).isoformat()
        except DateNormalizationError as e:
            logger.debug(f"Packed date rejected ({type(e).__name__}): {e}")
            return None
        except Exception as e:
            logger.warning(f"Unexpected error normalizing packed date {date_str!r}: {e}",
                           exc_info=True)
            return None

    def parse(self, date_str: str) -> ParsedDate:
        """
        Parse a packed date into fields and timezone.

        Raises:
            EmptyInputError: blank input
            StructuralMismatchError: year, month or day missing or not numeric
            InvalidInstantError: unzoned fields too far out of range to form an instant
        """
        if not isinstance(date_str, str) or not date_str.strip():
            raise EmptyInputError("empty date string")

        text = date_str.strip()
        if self.prefix and text.startswith(self.prefix):
            text = text[len(self.prefix):]

        marker = TIMEZONE_MARKER.search(text)
        body = text[:marker.start()] if marker else text

        timestamp = Timestamp(**self.extract_fields(body))

        if marker:
            return ParsedDate(timestamp, self._explicit_offset(marker))

        # the offset is looked up at the rolled-over instant; the fields render as given
        try:
            moment = timestamp.to_moment()
        except (ValueError, OverflowError) as e:
            raise InvalidInstantError(f"{timestamp.render()}: {e}")

        return ParsedDate(timestamp, self.offset_provider.offset_for(moment))

    def extract_fields(self, body: str) -> Dict[str, int]:
        """
        Read calendar fields by position.

        Raises:
            StructuralMismatchError: if a required field is not numeric
        """
        fields = {}
        for field in PACKED_FIELDS:
            value = parse_int(field.slice(body))
            if value is None:
                if field.required:
                    raise StructuralMismatchError(f"{field.name} missing or not numeric in {body!r}")
                value = 0
            fields[field.name] = value
        return fields

    @staticmethod
    def _explicit_offset(marker: re.Match) -> TimezoneOffset:
        if marker.group("utc"):
            return TimezoneOffset.utc()
        minutes = marker.group("minutes") or marker.group("bare_minutes")
        return TimezoneOffset(
            sign=marker.group("sign"),
            hours=int(marker.group("hours")),
            minutes=int(minutes) if minutes else 0,
        )


# Global instance (singleton)
_packed_parser_instance = None


def get_packed_date_parser() -> PackedDateParser:
    """Get global PackedDateParser instance"""
    global _packed_parser_instance
    if _packed_parser_instance is None:
        _packed_parser_instance = PackedDateParser()
    return _packed_parser_instance


def normalize_packed_date(date_str: str,
                          offset_provider: Optional[LocalOffsetProvider] = None) -> Optional[str]:
    """
    Normalize a packed date string, never raising.

    Example:
        >>> normalize_packed_date("D:20230615120000+05'30'")
        '2023-06-15T12:00:00+05:30'
    """
    if offset_provider is None:
        return get_packed_date_parser().normalize_date(date_str)
    return PackedDateParser(offset_provider).normalize_date(date_str)
