"""
Tests for acupuncture point classification.
"""

import pytest

from tcm_structured_notes.acupuncture.point_classifier import (
    classify_point,
    classify_point_detailed,
    normalize_point_name,
    parse_point_code,
    validate_channel_table,
)
from tcm_structured_notes.core.constants import CHANNEL_REGION_RANGES
from tcm_structured_notes.core.enums import RegionName


class TestParsePointCode:
    """Channel + number parsing."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("BL-23", ("BL", 23)),
            ("bl23", ("BL", 23)),
            (" St 36 ", ("ST", 36)),
            ("CV-12", ("REN", 12)),
            ("cv6", ("REN", 6)),
            ("GV-20", ("DU", 20)),
            ("KI-3", ("KD", 3)),
            ("LR-3", ("LV", 3)),
            ("TE-5", ("SJ", 5)),
        ],
    )
    def test_parses_codes_and_aliases(self, name, expected):
        assert parse_point_code(name) == expected

    def test_unparseable_returns_none(self):
        assert parse_point_code("Yin Tang") is None
        assert parse_point_code("") is None

    def test_normalize_point_name(self):
        assert normalize_point_name("  yin   tang ") == "YINTANG"


class TestClassifyPoint:
    """Region lookup."""

    @pytest.mark.parametrize(
        "name, region",
        [
            ("BL-23", RegionName.BACK),
            ("BL-25", RegionName.BACK),
            ("GB-30", RegionName.HIP),
            ("ST-36", RegionName.LOWER_LEG),
            ("LI-4", RegionName.HAND),
            ("LV-3", RegionName.FOOT),
            ("KI-3", RegionName.FOOT),
            ("CV-12", RegionName.ABDOMEN),
            ("GV-20", RegionName.HEAD),
            ("SP-6", RegionName.LOWER_LEG),
            ("PC-6", RegionName.FOREARM),
        ],
    )
    def test_channel_points(self, name, region):
        assert classify_point(name) == region

    @pytest.mark.parametrize("name", ["Yin Tang", "yintang", "YIN TANG", "  Yin  Tang "])
    def test_extra_point_variants_map_to_head(self, name):
        assert classify_point(name) == RegionName.HEAD

    def test_extra_point_is_flagged(self):
        result = classify_point_detailed("Yin Tang")
        assert result.is_extra_point
        assert not result.is_miss

    def test_unknown_channel_goes_to_other(self):
        result = classify_point_detailed("XYZ-99")
        assert result.region == RegionName.OTHER
        assert result.miss is not None
        assert result.miss.reason == "unknown_channel"

    def test_out_of_range_goes_to_other(self):
        result = classify_point_detailed("LU-40")
        assert result.region == RegionName.OTHER
        assert result.miss.reason == "out_of_range"
        assert result.miss.number == 40

    def test_unparseable_goes_to_other(self):
        result = classify_point_detailed("the usual points")
        assert result.region == RegionName.OTHER
        assert result.miss.reason == "unparseable"

    def test_classification_is_deterministic(self):
        assert [classify_point("GB-30") for _ in range(3)] == [RegionName.HIP] * 3


class TestChannelTable:
    """Static table consistency."""

    def test_table_has_no_gaps_or_overlaps(self):
        assert validate_channel_table() == []

    def test_every_number_in_range_classifies(self):
        for channel, ranges in CHANNEL_REGION_RANGES.items():
            last = ranges[-1][1]
            for number in range(1, last + 1):
                result = classify_point_detailed(f"{channel}-{number}")
                assert not result.is_miss, f"{channel}-{number}"

    def test_one_past_last_point_is_a_miss(self):
        for channel, ranges in CHANNEL_REGION_RANGES.items():
            last = ranges[-1][1]
            assert classify_point(f"{channel}-{last + 1}") == RegionName.OTHER
