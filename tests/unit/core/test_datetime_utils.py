"""Tests for core/datetime_utils.py."""

from datetime import date

import pytest

from tvmaze_metadata.core.datetime_utils import parse_air_date, parse_premiere_year


class TestParseAirDate:
    """Tests for parse_air_date function."""

    def test_plain_date(self):
        assert parse_air_date("2020-05-01") == date(2020, 5, 1)

    def test_datetime_with_offset(self):
        assert parse_air_date("2020-05-01T20:00:00+00:00") == date(2020, 5, 1)

    def test_datetime_with_z_suffix(self):
        assert parse_air_date("2020-05-01T20:00:00Z") == date(2020, 5, 1)

    def test_surrounding_whitespace(self):
        assert parse_air_date(" 2020-05-01 ") == date(2020, 5, 1)

    @pytest.mark.parametrize("value", [None, "", "TBA", "2020-13-45", "01/05/2020"])
    def test_unparsable_returns_none(self, value):
        assert parse_air_date(value) is None


class TestParsePremiereYear:
    """Tests for parse_premiere_year function."""

    def test_year(self):
        assert parse_premiere_year("2005-03-26") == 2005

    def test_missing(self):
        assert parse_premiere_year(None) is None

    def test_garbage(self):
        assert parse_premiere_year("soon") is None
