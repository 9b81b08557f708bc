"""
Batch pipeline for normalizing document metadata dates.

Ingests a CSV of metadata records extracted from PDF and DOCX files,
validates it, and normalizes every date column with the parser that
matches each row's source format.

1. Ingest CSV
2. Validate each record and drop those that cannot be routed to a parser
3. Normalize dates (packed parser for PDF rows, freeform parser for DOCX rows)
4. Return clean DataFrame plus processing stats
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from docdate.config import Config
from docdate.normalization.freeform_date import FreeformDateParser
from docdate.normalization.local_offset import LocalOffsetProvider, get_local_offset_provider
from docdate.normalization.packed_date import PackedDateParser
from docdate.validation.metadata_validator import get_metadata_validator

logger = logging.getLogger(__name__)


class MetadataPipeline:
    """
    Pipeline for processing extracted document metadata.

    Pipeline stages:
    1. Load CSV
    2. Validate records and note issues
    3. Normalize date columns per source format
    4. Return clean DataFrame
    """

    def __init__(self, offset_provider: Optional[LocalOffsetProvider] = None):
        """Initialize pipeline with all components"""
        self.offset_provider = offset_provider or get_local_offset_provider()
        self.validator = get_metadata_validator()
        self.parsers = {
            "packed": PackedDateParser(self.offset_provider),
            "freeform": FreeformDateParser(self.offset_provider),
        }

        logger.info("Pipeline initialized")

    def normalize_value(self, source_format: Any, value: Any) -> Optional[str]:
        """Normalize one date value with the parser for its source format"""
        flavour = Config.SOURCE_FORMATS.get(str(source_format).strip().lower())
        if flavour is None:
            return None
        return self.parsers[flavour].normalize_date(value)

    def process_csv(self, csv_path: Path) -> Tuple[pd.DataFrame, Dict]:
        """
        Process a CSV file through the complete pipeline.

        Args:
            csv_path: Path to metadata CSV file

        Returns:
            Tuple of (clean_dataframe, metadata_dict)

        Raises:
            FileNotFoundError: if csv_path does not exist
            ValueError: if the CSV cannot be read or lacks required columns
        """
        start_time = time.time()
        metadata = {
            'input_file': str(csv_path),
            'total_rows': 0,
            'validation_errors': [],
            'normalized_counts': {},
            'failed_counts': {},
            'processing_time_seconds': 0.0
        }

        logger.info(f"Processing CSV: {csv_path}")

        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_path}")

        try:
            # keep raw strings, packed dates must not turn into numbers
            df = pd.read_csv(csv_path, dtype=str)
        except Exception as e:
            raise ValueError(f"Failed to read CSV file: {e}")

        missing_columns = [col for col in Config.REQUIRED_COLUMNS if col not in df.columns]
        if missing_columns:
            raise ValueError(f"Missing required columns: {missing_columns}")

        # Preserve original row index for ground truth matching
        df['original_row_index'] = df.index

        metadata['total_rows'] = len(df)
        logger.info(f"Loaded {len(df)} rows from CSV")

        # record validation
        validation_summary = self.validator.validate_batch(df.to_dict('records'))
        critical_indices = validation_summary.get('critical_indices', [])
        metadata['validation_errors'].extend([f"Unroutable record at row {idx}: "
                                              f"source_format={df.iloc[idx]['source_format']!r}"
                                              for idx in critical_indices])
        if critical_indices:
            df = df.drop(df.index[critical_indices]).copy()
            logger.info(f"Removed {len(critical_indices)} records without a usable source format")

        # date normalization
        logger.info("Starting date normalization")
        for column in Config.DATE_COLUMNS:
            normalized = [self.normalize_value(fmt, value)
                          for fmt, value in zip(df['source_format'], df[column])]
            present = df[column].notna() & (df[column].astype(str).str.strip() != "")
            df[f'normalized_{column}'] = normalized

            normalized_count = int(df[f'normalized_{column}'].notna().sum())
            metadata['normalized_counts'][column] = normalized_count
            metadata['failed_counts'][column] = int(present.sum()) - normalized_count
        logger.info("Date normalization complete")

        clean_df = df[['filename', 'source_format']
                      + [f'normalized_{column}' for column in Config.DATE_COLUMNS]
                      + ['original_row_index']].copy()
        clean_df.columns = (['filename', 'source_format'] + Config.DATE_COLUMNS
                            + ['original_row_index'])
        clean_df['source_format'] = clean_df['source_format'].str.strip().str.lower()

        metadata['processing_time_seconds'] = time.time() - start_time
        logger.info(f"Pipeline complete in {metadata['processing_time_seconds']:.2f}s")

        return clean_df, metadata


# Helper function for CLI
def process_metadata_file(csv_path: str,
                          offset_provider: Optional[LocalOffsetProvider] = None) -> Tuple[pd.DataFrame, Dict]:
    """
    Helper function to process a CSV file.

    Args:
        csv_path: Path to CSV file (string)

    Returns:
        Tuple of (clean_dataframe, metadata)
    """
    pipeline = MetadataPipeline(offset_provider)
    return pipeline.process_csv(Path(csv_path))
