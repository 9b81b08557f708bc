"""
Data validation module for checking document metadata records.

Validates records for:
- Missing or unknown source format
- Missing or empty date fields
- Date fields without any numeric content

Flags issues without stopping processing
"""

import logging
from typing import Any, Dict, List, Tuple, Optional
import pandas as pd

from docdate.config import Config

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    """True for None, pandas NaN and blank strings"""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return True
    return not str(value).strip()


class MetadataValidator:
    """Validates metadata record quality"""

    def __init__(self):
        """Initialize metadata validator with config rules"""
        self.source_formats = Config.SOURCE_FORMATS
        self.date_columns = Config.DATE_COLUMNS

    def validate_date_field(self, date_str: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate a date field.

        Checks:
        - Not empty
        - Contains date-like content (has numbers)

        Note: Actual parsing happens in the date parsers.
        This just checks if it looks like a date.

        Args:
            date_str: Date value to validate

        Returns:
            Tuple of (is_valid, issue_description)
        """
        if _is_missing(date_str):
            return (False, "missing_date")

        if not any(char.isdigit() for char in str(date_str)):
            return (False, "no_numeric_content")

        return (True, None)

    def validate_source_format(self, source_format: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate the source container format.

        Returns:
            Tuple of (is_valid, issue_description)
        """
        if _is_missing(source_format):
            return (False, "missing_source_format")

        if str(source_format).strip().lower() not in self.source_formats:
            return (False, "unknown_source_format")

        return (True, None)

    def validate_record(self, record: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate a complete metadata record.

        A record without a usable source format cannot be routed to a parser
        and is critical. Missing dates are reported but not critical, since
        many documents never record a modification date.

        Args:
            record: Dict with keys 'source_format' and the date columns

        Returns:
            Tuple of (has_critical_issues, list_of_all_issues)
        """
        issues = []
        critical = False

        format_valid, format_issue = self.validate_source_format(record.get('source_format'))
        if not format_valid:
            issues.append(f"source_format:{format_issue}")
            critical = True

        for column in self.date_columns:
            date_valid, date_issue = self.validate_date_field(record.get(column))
            if not date_valid:
                issues.append(f"{column}:{date_issue}")

        if issues:
            logger.debug(f"Record validation issues: {issues}")

        return (critical, issues)

    def validate_batch(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validate a batch of records.

        Returns:
            Dict with validation summary:
            {
                'total': int,
                'valid': int,
                'with_issues': int,
                'critical': int,
                'issues_by_type': dict,
                'critical_indices': list
            }
        """
        total = len(records)
        valid_count = 0
        with_issues_count = 0
        critical_indices = []
        issues_by_type = {}

        for idx, record in enumerate(records):
            has_critical, issues = self.validate_record(record)

            if not issues:
                valid_count += 1
            else:
                with_issues_count += 1
                for issue in issues:
                    issues_by_type[issue] = issues_by_type.get(issue, 0) + 1

            if has_critical:
                critical_indices.append(idx)

        summary = {
            'total': total,
            'valid': valid_count,
            'with_issues': with_issues_count,
            'critical': len(critical_indices),
            'issues_by_type': issues_by_type,
            'critical_indices': critical_indices
        }

        logger.info(f"Batch validation: {valid_count}/{total} fully valid, "
                    f"{with_issues_count} with issues, {len(critical_indices)} critical")

        return summary

    def check_completeness(self, record: Dict[str, Any]) -> float:
        """
        Fraction of date columns that hold a value.

        Returns:
            Float between 0.0 and 1.0
        """
        present = sum(1 for column in self.date_columns if not _is_missing(record.get(column)))
        return present / len(self.date_columns)


# Global instance (singleton)
_metadata_validator_instance = None


def get_metadata_validator() -> MetadataValidator:
    """Get global MetadataValidator instance"""
    global _metadata_validator_instance
    if _metadata_validator_instance is None:
        _metadata_validator_instance = MetadataValidator()
    return _metadata_validator_instance
