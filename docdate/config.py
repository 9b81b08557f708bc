"""
Central configuration for the document metadata date normalizer.

This module contains all application settings, paths, and constants.
All other modules import configuration from here to maintain consistency.
"""

import os
from pathlib import Path
from typing import Dict, List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Config:
    """Application configuration and constants"""

    # ==========================================
    # Project Paths
    # ==========================================
    PROJECT_ROOT = Path(__file__).parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    RAW_DATA_DIR = DATA_DIR / "raw"
    PROCESSED_DATA_DIR = DATA_DIR / "processed"
    GROUND_TRUTH_DIR = DATA_DIR / "ground_truth"

    # ==========================================
    # Application Settings
    # ==========================================
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")          # DEBUG, INFO, WARNING, ERROR

    # Optional override for the local UTC offset, e.g. "+05:30".
    # When unset the host's configured timezone is used.
    LOCAL_UTC_OFFSET = os.getenv("LOCAL_UTC_OFFSET") or None

    # ==========================================
    # Date Parsing
    # ==========================================
    # Literal prefix carried by PDF packed dates (D:YYYYMMDDHHmmSS...)
    PACKED_DATE_PREFIX = os.getenv("PACKED_DATE_PREFIX", "D:")

    # dateparser fallback for freeform strings
    DATEPARSER_LANGUAGES: List[str] = ["en"]
    # no relative dates ("yesterday") and no partial dates ("June 2023")
    DATEPARSER_SETTINGS: Dict[str, object] = {
        "PARSERS": ["custom-formats", "absolute-time"],
        "REQUIRE_PARTS": ["day", "month", "year"],
    }

    # ==========================================
    # Metadata Schema
    # ==========================================
    # source container format -> date flavour it stores
    SOURCE_FORMATS: Dict[str, str] = {
        "pdf": "packed",
        "docx": "freeform",
    }

    DATE_COLUMNS: List[str] = ["creation_date", "modification_date"]
    REQUIRED_COLUMNS: List[str] = ["filename", "source_format"] + DATE_COLUMNS

    # ==========================================
    # Sample Data Settings
    # ==========================================
    # For docdate/samples/metadata_generator.py
    NUM_SAMPLE_RECORDS = int(os.getenv("NUM_SAMPLE_RECORDS", "200"))

    # Offset the generator assumes for local (unzoned) dates in ground truth
    SAMPLE_LOCAL_UTC_OFFSET = "+00:00"

    # Shapes of DOCX core-property dates to mix in sample data
    SAMPLE_FREEFORM_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",      # 2023-06-15T12:00:00Z
        "%Y-%m-%dT%H:%M:%S",       # 2023-06-15T12:00:00
        "%Y-%m-%d %H:%M:%S",       # 2023-06-15 12:00:00
        "%Y-%m-%dT%H:%M:%S+02:00", # 2023-06-15T12:00:00+02:00
        "%d %B %Y %H:%M:%S",       # 15 June 2023 12:00:00
        "%B %d, %Y %H:%M:%S",      # June 15, 2023 12:00:00
    ]

    # ==========================================
    # Logging Configuration
    # ==========================================
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    # ==========================================
    # Output Formatting
    # ==========================================
    CLI_MAX_WIDTH = 100

    # ==========================================
    # Class Methods
    # ==========================================
    @classmethod
    def ensure_directories(cls) -> None:
        """
        Create all necessary directories if they don't exist.

        This should be called at application startup to ensure
        the file system is properly initialized.
        """
        directories = [
            cls.DATA_DIR,
            cls.RAW_DATA_DIR,
            cls.PROCESSED_DATA_DIR,
            cls.GROUND_TRUTH_DIR
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate_environment(cls) -> bool:
        """
        Validate settings that come from the environment.

        Returns:
            bool: True if environment is valid, False otherwise
        """
        problems = []

        if cls.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            problems.append(f"LOG_LEVEL={cls.LOG_LEVEL}")

        if cls.LOCAL_UTC_OFFSET:
            # imported here to keep config free of package imports at load time
            from docdate.normalization.local_offset import FixedLocalOffset
            try:
                FixedLocalOffset.parse(cls.LOCAL_UTC_OFFSET)
            except ValueError:
                problems.append(f"LOCAL_UTC_OFFSET={cls.LOCAL_UTC_OFFSET}")

        if len(cls.PACKED_DATE_PREFIX) != 2:
            problems.append(f"PACKED_DATE_PREFIX={cls.PACKED_DATE_PREFIX}")

        if problems:
            print(f"Invalid environment variables: {', '.join(problems)}")
            return False

        return True

    @classmethod
    def print_config_summary(cls) -> None:
        """Print configuration summary for debugging"""
        print("=" * 60)
        print("Document Date Normalizer - Configuration Summary")
        print("=" * 60)
        print(f"Log Level:            {cls.LOG_LEVEL}")
        print(f"Local UTC Offset:     {cls.LOCAL_UTC_OFFSET or 'system timezone'}")
        print(f"Packed Date Prefix:   {cls.PACKED_DATE_PREFIX}")
        print(f"Source Formats:       {', '.join(cls.SOURCE_FORMATS)}")
        print(f"Date Columns:         {', '.join(cls.DATE_COLUMNS)}")
        print(f"Processed Data:       {cls.PROCESSED_DATA_DIR}")
        print("=" * 60)
