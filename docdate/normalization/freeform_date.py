"""
Freeform date normalization module.

Normalizes loosely formatted calendar strings (DOCX core properties such as
dcterms:created) to YYYY-MM-DDTHH:mm:ss with an explicit timezone.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import ciso8601
import dateparser

from docdate.config import Config
from docdate.normalization.errors import (
    DateNormalizationError,
    EmptyInputError,
    StructuralMismatchError,
)
from docdate.normalization.local_offset import LocalOffsetProvider, get_local_offset_provider
from docdate.normalization.timestamp import ParsedDate, Timestamp

logger = logging.getLogger(__name__)

# Explicit timezone at the very end of the string: Z or ±HH:MM
TIMEZONE_SUFFIX = re.compile(r"(?:[Zz]|[+-]\d{2}:\d{2})$")


class FreeformDateParser:
    """Normalizes freeform calendar strings to canonical form"""

    def __init__(self, offset_provider: Optional[LocalOffsetProvider] = None):
        """
        Args:
            offset_provider: Local clock for dates without a timezone.
                Defaults to the global provider.
        """
        self.offset_provider = offset_provider or get_local_offset_provider()

    def normalize_date(self, date_str: str) -> Optional[str]:
        """
        Normalize a freeform date string.

        Strings that already end in Z or ±HH:MM are returned trimmed but
        otherwise untouched. Anything else gets the local offset.

        Returns:
            Canonical date string, or None if the input is not a date
        """
        try:
            return self._normalize(date_str)
        except DateNormalizationError as e:
            logger.debug(f"Freeform date rejected ({type(e).__name__}): {e}")
            return None
        except Exception as e:
            logger.warning(f"Unexpected error normalizing freeform date {date_str!r}: {e}",
                           exc_info=True)
            return None

    def _normalize(self, date_str: str) -> str:
        if not isinstance(date_str, str) or not date_str.strip():
            raise EmptyInputError("empty date string")

        trimmed = date_str.strip()
        parsed = self.parse_datetime(trimmed)

        if TIMEZONE_SUFFIX.search(trimmed):
            return trimmed

        offset = self.offset_provider.offset_for(parsed)
        if parsed.tzinfo is not None:
            # zone we could not echo back verbatim (e.g. +0530): show local wall time
            local_zone = timezone(timedelta(minutes=offset.total_minutes))
            parsed = parsed.astimezone(local_zone).replace(tzinfo=None)

        return ParsedDate(Timestamp.from_datetime(parsed), offset).isoformat()

    def parse_datetime(self, date_str: str) -> datetime:
        """
        Parse a calendar string into a datetime.

        Raises:
            StructuralMismatchError: if no date can be read from the string
        """
        try:
            # Fast path for ISO 8601
            return ciso8601.parse_datetime(date_str)
        except ValueError:
            pass

        # Flexible fallback
        dt = dateparser.parse(
            date_str,
            languages=Config.DATEPARSER_LANGUAGES,
            settings=Config.DATEPARSER_SETTINGS,
        )
        if dt is None:
            raise StructuralMismatchError(f"unparseable date: {date_str!r}")
        return dt


# Global instance (singleton)
_freeform_parser_instance = None


def get_freeform_date_parser() -> FreeformDateParser:
    """Get global FreeformDateParser instance"""
    global _freeform_parser_instance
    if _freeform_parser_instance is None:
        _freeform_parser_instance = FreeformDateParser()
    return _freeform_parser_instance


def normalize_freeform_date(date_str: str,
                            offset_provider: Optional[LocalOffsetProvider] = None) -> Optional[str]:
    """
    Normalize a freeform date string, never raising.

    Example:
        >>> normalize_freeform_date("2023-06-15T12:00:00Z")
        '2023-06-15T12:00:00Z'
    """
    if offset_provider is None:
        return get_freeform_date_parser().normalize_date(date_str)
    return FreeformDateParser(offset_provider).normalize_date(date_str)
