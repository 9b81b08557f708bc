"""
Reasons a date string could not be normalized.

Raised inside the parsers and caught at their public boundary, where
every one of them becomes a None result.
"""


class DateNormalizationError(ValueError):
    """Base class for date normalization failures"""


class EmptyInputError(DateNormalizationError):
    """Input is None, not a string, or blank"""


class StructuralMismatchError(DateNormalizationError):
    """Required fields are absent or not numeric"""


class InvalidInstantError(DateNormalizationError):
    """Fields are numeric but do not form a point in time"""
