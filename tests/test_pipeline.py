"""
Tests for the metadata batch pipeline.
"""

import pandas as pd
import pytest
from docdate.normalization.local_offset import FixedLocalOffset
from docdate.pipeline.metadata_pipeline import MetadataPipeline, process_metadata_file


def write_csv(path, records):
    pd.DataFrame(records).to_csv(path, index=False)
    return path


class TestMetadataPipeline:
    """Test suite for MetadataPipeline"""

    @pytest.fixture
    def pipeline(self):
        """Pipeline pinned to UTC-05:00"""
        return MetadataPipeline(FixedLocalOffset(-300))

    @pytest.fixture
    def metadata_csv(self, tmp_path):
        return write_csv(tmp_path / "metadata.csv", [
            {"filename": "a.pdf", "source_format": "pdf",
             "creation_date": "D:20230615120000+05'30'", "modification_date": "D:2023061512"},
            {"filename": "b.docx", "source_format": "DOCX",
             "creation_date": "2023-06-15T12:00:00Z", "modification_date": "2023-06-16 08:00:00"},
            {"filename": "c.pdf", "source_format": "pdf",
             "creation_date": "garbage", "modification_date": ""},
            {"filename": "d.odt", "source_format": "odt",
             "creation_date": "2023-06-15", "modification_date": "2023-06-15"},
        ])

    def test_normalizes_each_format_with_its_parser(self, pipeline, metadata_csv):
        df, metadata = pipeline.process_csv(metadata_csv)

        rows = df.set_index("filename")
        assert rows.loc["a.pdf", "creation_date"] == "2023-06-15T12:00:00+05:30"
        assert rows.loc["a.pdf", "modification_date"] == "2023-06-15T12:00:00-05:00"
        assert rows.loc["b.docx", "creation_date"] == "2023-06-15T12:00:00Z"
        assert rows.loc["b.docx", "modification_date"] == "2023-06-16T08:00:00-05:00"
        assert rows.loc["b.docx", "source_format"] == "docx"
        assert pd.isna(rows.loc["c.pdf", "creation_date"])
        assert pd.isna(rows.loc["c.pdf", "modification_date"])

    def test_unroutable_records_are_dropped(self, pipeline, metadata_csv):
        df, metadata = pipeline.process_csv(metadata_csv)

        assert "d.odt" not in df["filename"].tolist()
        assert metadata['total_rows'] == 4
        assert len(metadata['validation_errors']) == 1
        assert "row 3" in metadata['validation_errors'][0]

    def test_counts(self, pipeline, metadata_csv):
        df, metadata = pipeline.process_csv(metadata_csv)

        assert metadata['normalized_counts'] == {"creation_date": 2, "modification_date": 2}
        # "garbage" was present but rejected; the empty value is not a failure
        assert metadata['failed_counts'] == {"creation_date": 1, "modification_date": 0}

    def test_original_row_index_is_kept(self, pipeline, metadata_csv):
        df, _ = pipeline.process_csv(metadata_csv)
        assert df["original_row_index"].tolist() == [0, 1, 2]

    def test_missing_file(self, pipeline, tmp_path):
        with pytest.raises(FileNotFoundError):
            pipeline.process_csv(tmp_path / "missing.csv")

    def test_missing_columns(self, pipeline, tmp_path):
        path = write_csv(tmp_path / "bad.csv", [{"filename": "a.pdf", "creation_date": "D:2023"}])
        with pytest.raises(ValueError, match="Missing required columns"):
            pipeline.process_csv(path)

    def test_normalize_value_unknown_format(self, pipeline):
        assert pipeline.normalize_value("odt", "2023-06-15") is None
        assert pipeline.normalize_value("pdf", "D:20230615120000Z") == "2023-06-15T12:00:00Z"

    def test_helper(self, metadata_csv):
        df, metadata = process_metadata_file(str(metadata_csv), FixedLocalOffset(0))
        assert df.set_index("filename").loc["a.pdf", "modification_date"] == "2023-06-15T12:00:00+00:00"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
