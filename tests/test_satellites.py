"""Tests for satellite identifier and formatting utilities."""

import pytest

from pygnss_obs.utils.format import format_epoch_time, year_2c_to_4c
from pygnss_obs.utils.satellites import (
    GNSSConstellation,
    is_gps_sat,
    normalize_sat_id,
    split_satellite_list,
)


class TestNormalizeSatId:
    """Test satellite ID normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("3", "G03"),
            ("03", "G03"),
            (" 12 ", "G12"),
            ("G03", "G03"),
            ("G3", "G3"),
            ("R05", "R05"),
            ("E11", "E11"),
            ("", ""),
            ("   ", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_sat_id(raw) == expected

    def test_digits_with_trailing_text(self):
        """Only the leading digits form the PRN."""
        assert normalize_sat_id("7x") == "G07"


class TestIsGpsSat:
    """Test GPS classification."""

    def test_gps_letter(self):
        assert is_gps_sat("G07") is True

    def test_bare_prn(self):
        assert is_gps_sat("7") is True

    def test_other_systems(self):
        for sat in ("R05", "E11", "C20", "J01", "S20"):
            assert is_gps_sat(sat) is False

    def test_empty(self):
        assert is_gps_sat("") is False


class TestSplitSatelliteList:
    """Test RINEX 2 satellite list splitting."""

    def test_concatenated_fields(self):
        assert split_satellite_list("G05G07G12") == ["G05", "G07", "G12"]

    def test_bare_prns(self):
        assert split_satellite_list(" 3 7 12") == ["3", "7", "12"]

    def test_blank_padded_prn(self):
        assert split_satellite_list("G 5G07") == ["G05", "G07"]

    def test_mixed_systems(self):
        assert split_satellite_list("G05R12E07") == ["G05", "R12", "E07"]

    def test_clock_offset_ignored(self):
        """The receiver clock offset after the list is not a satellite."""
        assert split_satellite_list("G05G07   -0.000123456") == ["G05", "G07"]

    def test_empty(self):
        assert split_satellite_list("   ") == []


class TestGNSSConstellation:
    """Test system letter lookup."""

    def test_known_letter(self):
        assert GNSSConstellation.from_letter("G") is GNSSConstellation.GPS
        assert GNSSConstellation.from_letter("r") is GNSSConstellation.GLONASS

    def test_unknown_letter(self):
        assert GNSSConstellation.from_letter("X") is None


class TestYearExpansion:
    """Test two-digit year expansion."""

    @pytest.mark.parametrize(
        "year,expected",
        [(24, 2024), (0, 2000), (79, 2079), (80, 1980), (99, 1999), (2024, 2024)],
    )
    def test_default_pivot(self, year, expected):
        assert year_2c_to_4c(year) == expected

    def test_custom_pivot(self):
        assert year_2c_to_4c(70, pivot=60) == 1970
        assert year_2c_to_4c(59, pivot=60) == 2059


class TestFormatEpochTime:
    """Test epoch timestamp formatting."""

    def test_whole_seconds(self):
        assert format_epoch_time(2024, 1, 15, 0, 0, 30.0) == "2024-01-15T00:00:30.0000000"

    def test_fractional_seconds(self):
        assert format_epoch_time(2024, 12, 31, 23, 59, 5.5) == "2024-12-31T23:59:05.5000000"
