"""
Generate messy document metadata for testing.

This script creates a CSV file of metadata records as a document reader
would extract them, with intentionally inconsistent date encodings:
- PDF packed dates with and without the D: prefix, quotes, offsets and time
- DOCX freeform dates in ISO and long-hand shapes, zoned and unzoned
- Edge cases (empty values, truncated dates, garbage, unknown formats)

A ground truth CSV with the expected canonical dates is written alongside.
Unzoned dates in the ground truth assume Config.SAMPLE_LOCAL_UTC_OFFSET.

Usage:
    python -m docdate.samples.metadata_generator

Output:
    data/raw/messy_metadata.csv (columns: filename, source_format, creation_date, modification_date)
    data/ground_truth/metadata_ground_truth.csv
"""

import random
from collections import Counter
from datetime import datetime, timedelta
from pathlib import Path
import sys

import pandas as pd
from docdate.config import Config


class MessyMetadataGenerator:
    """Generates intentionally messy document metadata for testing"""

    # (sign, hours, minutes) offsets seen in real PDF producers
    PDF_OFFSETS = [
        ("+", 5, 30),
        ("-", 8, 0),
        ("+", 1, 0),
        ("-", 3, 30),
        ("+", 9, 0),
    ]

    # Broken values, none of which normalize
    EDGE_CASE_DATES = [
        "",               # missing value
        "   ",            # whitespace only
        "D:2023",         # truncated before month
        "D:202306",       # truncated before day
        "garbage",        # not a date at all
        "D:YYYYMMDD",     # template left in by a broken producer
    ]

    EDGE_CASE_FORMATS = ["odt", ""]

    def __init__(self, num_records=None):
        """
        Initialize generator
        Args:
            num_records: Number of metadata records to generate
        """
        self.num_records = num_records if num_records else Config.NUM_SAMPLE_RECORDS
        self.output_path = Config.RAW_DATA_DIR / "messy_metadata.csv"
        self.ground_truth_path = Config.GROUND_TRUTH_DIR / "metadata_ground_truth.csv"
        self.local_offset = Config.SAMPLE_LOCAL_UTC_OFFSET

    def random_moment(self) -> datetime:
        """Random whole-second moment in the past year"""
        seconds_ago = random.randint(0, 365 * 24 * 3600)
        return (datetime.now() - timedelta(seconds=seconds_ago)).replace(microsecond=0)

    def generate_packed_date(self) -> tuple:
        """Return (messy packed date, expected canonical date)"""
        moment = self.random_moment()
        digits = moment.strftime("%Y%m%d%H%M%S")
        canonical = moment.strftime("%Y-%m-%dT%H:%M:%S")
        prefix = "D:" if random.random() < 0.9 else ""

        style = random.choice(["utc", "quoted_offset", "bare_offset", "local", "date_only"])

        if style == "utc":
            return f"{prefix}{digits}Z", f"{canonical}Z"

        if style in ("quoted_offset", "bare_offset"):
            sign, hours, minutes = random.choice(self.PDF_OFFSETS)
            if style == "quoted_offset":
                marker = f"{sign}{hours:02d}'{minutes:02d}'"
            else:
                marker = f"{sign}{hours:02d}{minutes:02d}"
            return f"{prefix}{digits}{marker}", f"{canonical}{sign}{hours:02d}:{minutes:02d}"

        if style == "date_only":
            return f"{prefix}{digits[:8]}", f"{moment.strftime('%Y-%m-%d')}T00:00:00{self.local_offset}"

        return f"{prefix}{digits}", f"{canonical}{self.local_offset}"

    def generate_freeform_date(self) -> tuple:
        """Return (messy freeform date, expected canonical date)"""
        moment = self.random_moment()
        date_format = random.choice(Config.SAMPLE_FREEFORM_FORMATS)
        date_str = moment.strftime(date_format)

        if date_format.endswith(("Z", "+02:00")):
            # zoned strings pass through untouched
            expected = date_str
        else:
            expected = f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}{self.local_offset}"

        # Add extra spaces
        if random.random() < 0.1:  # 10% chance
            date_str = f"  {date_str} "

        return date_str, expected

    def generate_record(self, index: int) -> tuple:
        """Generate one metadata record and its ground truth"""
        source_format = random.choice(list(Config.SOURCE_FORMATS))
        generate = (self.generate_packed_date if Config.SOURCE_FORMATS[source_format] == "packed"
                    else self.generate_freeform_date)

        record = {"filename": f"document_{index:04d}.{source_format}", "source_format": source_format}
        truth = {"row_index": index}

        for column in Config.DATE_COLUMNS:
            if random.random() < 0.05:  # 5% broken values
                record[column] = random.choice(self.EDGE_CASE_DATES)
                truth[column] = ""
            else:
                record[column], truth[column] = generate()

        if random.random() < 0.03:  # 3% records that cannot be routed
            record["source_format"] = random.choice(self.EDGE_CASE_FORMATS)
            for column in Config.DATE_COLUMNS:
                truth[column] = ""

        return record, truth

    def generate_csv(self) -> tuple:
        """
        Generate both messy CSV and ground truth CSV.

        Returns:
            Tuple of (messy_csv_path, ground_truth_csv_path)
        """
        print(f"Generating {self.num_records} messy metadata records...")

        records = []
        ground_truths = []

        for i in range(self.num_records):
            record, truth = self.generate_record(i)
            records.append(record)
            ground_truths.append(truth)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.ground_truth_path.parent.mkdir(parents=True, exist_ok=True)

        pd.DataFrame(records).to_csv(self.output_path, index=False)
        print(f"   Generated messy data: {self.output_path}")
        print(f"   Total records: {self.num_records}")

        pd.DataFrame(ground_truths).to_csv(self.ground_truth_path, index=False)
        print(f"   Generated ground truth: {self.ground_truth_path}")

        self._print_statistics(records)

        return self.output_path, self.ground_truth_path

    def _print_statistics(self, records: list):
        """Print statistics about generated data"""
        print("\nData Statistics:")

        format_counts = Counter(record["source_format"] or "<empty>" for record in records)
        for source_format, count in sorted(format_counts.items()):
            print(f"   {source_format:10s} {count:5d}")

        values = [record[column] for record in records for column in Config.DATE_COLUMNS]
        print(f"   Zoned to UTC (Z):       {sum(1 for v in values if v.strip().endswith('Z'))}")
        quoted = sum(1 for v in values if v.endswith("'"))
        print(f"   Quoted PDF offsets:     {quoted}")
        print(f"   Empty values:           {sum(1 for v in values if not v.strip())}")


def main():
    """Main entry point"""
    print("=" * 70)
    print("Messy Document Metadata Generator")
    print("=" * 70)

    Config.ensure_directories()

    generator = MessyMetadataGenerator()
    messy_csv_path, ground_truth_path = generator.generate_csv()

    print("\n" + "=" * 70)
    print(f"  Success! Generated data:")
    print(f"   Messy CSV: {messy_csv_path}")
    print(f"   Ground Truth: {ground_truth_path}")
    print("=" * 70)

    return 0


if __name__ == "__main__":
    sys.exit(main())
