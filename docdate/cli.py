"""
Document Date Normalizer CLI

A CLI tool for normalizing PDF and DOCX metadata dates to one canonical form.

Usage:
    python -m docdate.cli <metadata.csv>          # Normalize a metadata CSV
    python -m docdate.cli --generate <num>        # Generate and process N sample records
    python -m docdate.cli                         # Interactive: normalize dates or show configuration
"""

import logging
import sys
from typing import Dict

import pandas as pd

from docdate.config import Config
from docdate.normalization.freeform_date import normalize_freeform_date
from docdate.normalization.local_offset import FixedLocalOffset
from docdate.normalization.packed_date import normalize_packed_date
from docdate.pipeline.metadata_pipeline import process_metadata_file
from docdate.samples.metadata_generator import MessyMetadataGenerator

# Configure logging for CLI
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format=Config.LOG_FORMAT,
    datefmt=Config.LOG_DATE_FORMAT
)
logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "normalized_metadata.csv"


def compare_with_ground_truth(clean_csv_path, ground_truth_csv_path) -> dict:
    """
    Compare normalized output with ground truth, column by column.

    Rows dropped by the pipeline are left out of the comparison.
    """
    try:
        clean_df = pd.read_csv(clean_csv_path, dtype=str)
        gt_df = pd.read_csv(ground_truth_csv_path, dtype=str)

        merged_df = clean_df.merge(
            gt_df,
            left_on='original_row_index',
            right_on='row_index',
            how='inner',
            suffixes=('_pred', '_truth')
        )
        logger.info(f"Matched {len(merged_df)} rows by original_row_index")

        metrics = {'total_rows': len(merged_df), 'columns': {}}
        for column in Config.DATE_COLUMNS:
            predicted = merged_df[f'{column}_pred'].fillna("")
            truth = merged_df[f'{column}_truth'].fillna("")
            matches = int((predicted == truth).sum())
            metrics['columns'][column] = {
                'matches': matches,
                'accuracy': (matches / len(merged_df)) * 100 if len(merged_df) else 0.0
            }

        return metrics

    except Exception as e:
        logger.error(f"Error comparing with ground truth: {e}", exc_info=True)
        return {'total_rows': 0, 'columns': {}, 'error': str(e)}


def display_accuracy_metrics(metrics: dict):
    """
    Display accuracy metrics comparing normalized output with ground truth.

    Args:
        metrics: Dictionary with accuracy metrics from compare_with_ground_truth
    """
    if 'error' in metrics:
        print(f"\nWarning: Could not calculate accuracy metrics: {metrics['error']}")
        return

    print("\n" + "=" * Config.CLI_MAX_WIDTH)
    print("Accuracy Metrics (vs Ground Truth)")
    print("=" * Config.CLI_MAX_WIDTH)

    for column, stats in metrics['columns'].items():
        print(f"\n{column}:")
        print(f"  Matches: {stats['matches']}/{metrics['total_rows']}")
        print(f"  Accuracy: {stats['accuracy']:.2f}%")

    print("=" * Config.CLI_MAX_WIDTH + "\n")


def display_results(df: pd.DataFrame, metadata: Dict):
    """Display processing results in a formatted table"""
    print("\n" + "=" * 80)
    print("PROCESSING RESULTS")
    print("=" * 80)
    print(f"Total records: {metadata.get('total_rows', len(df))}")
    print(f"Processing time: {metadata.get('processing_time_seconds', 0):.2f} seconds")
    print(f"Validation errors: {len(metadata.get('validation_errors', []))}")

    print("\nDates by column:")
    print("-" * 80)
    for column in Config.DATE_COLUMNS:
        normalized = metadata.get('normalized_counts', {}).get(column, 0)
        failed = metadata.get('failed_counts', {}).get(column, 0)
        print(f"  {column:30s} normalized {normalized:6d}   rejected {failed:6d}")

    print("\nRecords by source format:")
    print("-" * 80)
    for source_format, count in df['source_format'].value_counts().items():
        print(f"  {source_format:30s} {count:6d}")

    print("\nSample Records (first 10):")
    print("-" * 80)
    print(df.head(10).to_string(index=False))


def save_results(df: pd.DataFrame):
    """Write normalized records to the processed data directory"""
    output_path = Config.PROCESSED_DATA_DIR / OUTPUT_FILENAME
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    print(f"\n" + "=" * Config.CLI_MAX_WIDTH)
    print(f"Results saved to: {output_path}")
    print(f"Total rows saved: {len(df)}")
    print("=" * Config.CLI_MAX_WIDTH + "\n")
    return output_path


def process_file(csv_path: str) -> bool:
    """
    Normalize the dates of an existing metadata CSV.

    Returns:
        True if successful, False otherwise
    """
    try:
        df, metadata = process_metadata_file(csv_path)
        display_results(df, metadata)
        save_results(df)
        return True

    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error processing {csv_path}: {e}", exc_info=True)
        print(f"\nError: {e}")
        return False


def generate_and_process(num_records: int) -> bool:
    """
    Generate random sample metadata and process it.

    The sample ground truth assumes a fixed local offset, so processing
    uses the same offset instead of the host timezone.

    Args:
        num_records: Number of records to generate

    Returns:
        True if successful, False otherwise
    """
    print("\n" + "=" * 80)
    print("Document Date Normalizer")
    print("=" * 80)
    print(f"Generating {num_records} sample metadata records...")
    print("-" * 80)

    try:
        generator = MessyMetadataGenerator(num_records=num_records)
        messy_csv_path, ground_truth_path = generator.generate_csv()

        print(f"Generated test data: {messy_csv_path}")
        print(f"Generated ground truth: {ground_truth_path}")

        print("\nProcessing records...")
        sample_offset = FixedLocalOffset.parse(Config.SAMPLE_LOCAL_UTC_OFFSET)
        df, metadata = process_metadata_file(str(messy_csv_path), offset_provider=sample_offset)

        display_results(df, metadata)
        output_path = save_results(df)

        accuracy_metrics = compare_with_ground_truth(output_path, ground_truth_path)
        display_accuracy_metrics(accuracy_metrics)

        return True

    except Exception as e:
        logger.error(f"Error generating/processing data: {e}", exc_info=True)
        print(f"\nError: Failed to generate or process data: {e}")
        return False


def normalize_interactively(kind: str):
    """Prompt for one date string and print its canonical form"""
    date_str = input(f"Enter {kind} date: ")
    if kind == "packed":
        result = normalize_packed_date(date_str)
    else:
        result = normalize_freeform_date(date_str)

    if result is None:
        print("Not a valid date.")
    else:
        print(f"Normalized: {result}")


def run_single(argv) -> int:
    """Handle command line arguments, returning the exit code"""
    if argv[0] == "--generate":
        if len(argv) < 2:
            print("Usage: python -m docdate.cli --generate <num_records>")
            return 1
        try:
            num_records = int(argv[1])
        except ValueError:
            print("Error: Number of records must be an integer")
            return 1
        if num_records <= 0:
            print("Error: Number of records must be positive")
            return 1
        return 0 if generate_and_process(num_records) else 1

    return 0 if process_file(argv[0]) else 1


def main():
    """Main entry point for CLI"""
    if not Config.validate_environment():
        sys.exit(1)

    Config.ensure_directories()

    if len(sys.argv) > 1:
        try:
            sys.exit(run_single(sys.argv[1:]))
        except KeyboardInterrupt:
            print("\n\nInterrupted by user. Shutting down...")
            sys.exit(1)

    # Interactive loop mode
    print("\n" + "=" * 80)
    print("Document Date Normalizer")
    print("=" * 80)
    print("Interactive Mode")
    print("-" * 80)

    while True:
        print("\nOptions:")
        print("  0. Exit")
        print("  1. Normalize a PDF packed date (e.g. D:20230615120000+05'30')")
        print("  2. Normalize a DOCX freeform date (e.g. 2023-06-15T12:00:00Z)")
        print("  3. Show configuration")

        try:
            choice = input("\nEnter your choice: ").strip()

            if choice == "0":
                print("\nExiting. Goodbye!")
                break
            elif choice == "1":
                normalize_interactively("packed")
            elif choice == "2":
                normalize_interactively("freeform")
            elif choice == "3":
                Config.print_config_summary()
            else:
                print("Error: Invalid choice. Please enter 0, 1, 2 or 3.")

        except (KeyboardInterrupt, EOFError):
            print("\n\nInterrupted by user. Exiting...")
            break


if __name__ == '__main__':
    main()
