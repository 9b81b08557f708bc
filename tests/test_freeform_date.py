"""
Tests for the FreeformDateParser module.
"""

import re
from datetime import datetime

import pytest
from docdate.normalization.freeform_date import FreeformDateParser, normalize_freeform_date
from docdate.normalization.local_offset import FixedLocalOffset, LocalOffsetProvider
from docdate.normalization.timestamp import TimezoneOffset


class RecordingOffset(LocalOffsetProvider):
    """Fixed offset that remembers which moments it was asked about"""

    def __init__(self, minutes):
        self.offset = TimezoneOffset.from_minutes(minutes)
        self.moments = []

    def offset_for(self, moment):
        self.moments.append(moment)
        return self.offset


class BrokenOffset(LocalOffsetProvider):
    def offset_for(self, moment):
        raise RuntimeError("clock unavailable")


class TestFreeformDateParser:
    """Test suite for FreeformDateParser"""

    @pytest.fixture
    def parser(self):
        """Parser pinned to UTC+02:00"""
        return FreeformDateParser(FixedLocalOffset(120))

    @pytest.mark.parametrize("input_date,expected", [
        ("2023-06-15T12:00:00", "2023-06-15T12:00:00+02:00"),
        ("2023-06-15 12:00:00", "2023-06-15T12:00:00+02:00"),
        ("2023-06-15T12:00", "2023-06-15T12:00:00+02:00"),
        ("2023-06-15", "2023-06-15T00:00:00+02:00"),
        ("2023-06-15T12:00:00.999", "2023-06-15T12:00:00+02:00"),
        ("  2023-06-15T08:05:09  ", "2023-06-15T08:05:09+02:00"),
        ("15 June 2023 12:00:00", "2023-06-15T12:00:00+02:00"),
        ("June 15, 2023", "2023-06-15T00:00:00+02:00"),
    ])
    def test_unzoned_dates_get_local_offset(self, parser, input_date, expected):
        """Dates without a timezone are rebuilt with the local offset"""
        assert parser.normalize_date(input_date) == expected

    @pytest.mark.parametrize("input_date", [
        "2023-06-15T12:00:00Z",
        "2023-06-15T12:00:00+05:30",
        "2023-06-15T12:00:00-07:00",
        "2023-06-15T12:00:00.250+05:30",
        "2000-01-01T00:00:00Z",
    ])
    def test_zoned_dates_pass_through(self, parser, input_date):
        """Explicit Z or ±HH:MM is returned exactly as given"""
        assert parser.normalize_date(input_date) == input_date

    def test_passthrough_is_trimmed(self, parser):
        assert parser.normalize_date("  2023-06-15T12:00:00Z \n") == "2023-06-15T12:00:00Z"

    @pytest.mark.parametrize("input_date", [
        "", "   ", None, "not a date", "+05:30", 20230615,
    ])
    def test_invalid_dates(self, parser, input_date):
        """Test that invalid dates return None"""
        assert parser.normalize_date(input_date) is None

    def test_offset_without_colon_is_converted_to_local_time(self):
        """+0530 is not echoed back, the instant is shown in local time"""
        parser = FreeformDateParser(FixedLocalOffset(0))
        assert parser.normalize_date("2023-06-15T12:00:00+0530") == "2023-06-15T06:30:00+00:00"

    def test_negative_local_offset(self):
        parser = FreeformDateParser(FixedLocalOffset(-330))
        assert parser.normalize_date("2023-06-15T12:00:00") == "2023-06-15T12:00:00-05:30"

    def test_offset_is_looked_up_at_parsed_moment(self):
        provider = RecordingOffset(60)
        FreeformDateParser(provider).normalize_date("2023-01-20T09:30:00")
        assert provider.moments == [datetime(2023, 1, 20, 9, 30)]

    def test_zoned_dates_never_consult_the_clock(self):
        provider = RecordingOffset(60)
        FreeformDateParser(provider).normalize_date("2023-01-20T09:30:00Z")
        assert provider.moments == []

    def test_internal_errors_become_none(self):
        """A failing clock must not escape the parser"""
        parser = FreeformDateParser(BrokenOffset())
        assert parser.normalize_date("2023-06-15T12:00:00") is None

    @pytest.mark.parametrize("input_date", [
        "2023-06-15T12:00:00",
        "2023-06-15T12:00:00Z",
        "2023-06-15T12:00:00-07:00",
        "15 June 2023 12:00:00",
    ])
    def test_normalization_is_idempotent(self, parser, input_date):
        once = parser.normalize_date(input_date)
        assert parser.normalize_date(once) == once

    def test_output_always_carries_timezone(self, parser):
        for input_date in ["2023-06-15", "2023-06-15T12:00:00Z", "June 15, 2023"]:
            assert re.search(r"(Z|[+-]\d{2}:\d{2})$", parser.normalize_date(input_date))


class TestNormalizeFreeformDate:
    """Test suite for the module-level helper"""

    def test_empty_and_garbage(self):
        assert normalize_freeform_date("") is None
        assert normalize_freeform_date("not a date") is None

    def test_explicit_provider(self):
        result = normalize_freeform_date("2023-06-15T12:00:00", FixedLocalOffset(540))
        assert result == "2023-06-15T12:00:00+09:00"

    def test_default_provider_adds_some_offset(self):
        result = normalize_freeform_date("2023-06-15T12:00:00")
        assert re.fullmatch(r"2023-06-15T\d{2}:\d{2}:\d{2}[+-]\d{2}:\d{2}", result)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
