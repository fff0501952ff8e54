"""Tests for core/string_utils.py."""

import pytest

from tvmaze_metadata.core.string_utils import (
    contains_ci,
    normalize_episode_name,
    parse_series_name,
    strip_summary_html,
)


class TestNormalizeEpisodeName:
    """Tests for normalize_episode_name function."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("The.Big.One", "TheBigOne"),
            ("the big one", "thebigone"),
            ("Part_1-Part+2", "Part1Part2"),
            ("", ""),
            (" .+-_", ""),
        ],
    )
    def test_removes_separators(self, text, expected):
        assert normalize_episode_name(text) == expected

    def test_preserves_other_characters_and_order(self):
        text = "Café: Día #1 (Part/2)!"
        assert normalize_episode_name(text) == "Café:Día#1(Part/2)!"

    def test_preserves_case(self):
        assert normalize_episode_name("ThE bIg OnE") == "ThEbIgOnE"

    @pytest.mark.parametrize(
        "text",
        ["Winter.Is.Coming", "a - b _ c", "S01E01 The Pilot [tvmazeid-1]", "x"],
    )
    def test_idempotent(self, text):
        once = normalize_episode_name(text)
        assert normalize_episode_name(once) == once


class TestContainsCi:
    """Tests for contains_ci function."""

    def test_case_insensitive(self):
        assert contains_ci("Show.S01E01.The.Pilot", "the.pilot")

    def test_not_contained(self):
        assert not contains_ci("Show.S01E01", "Finale")

    def test_empty_needle(self):
        assert contains_ci("anything", "")


class TestStripSummaryHtml:
    """Tests for strip_summary_html function."""

    def test_none(self):
        assert strip_summary_html(None) is None

    def test_strips_known_tags(self):
        text = "<p>A <b>bold</b> and <i>italic</i> <em>story</em>.</p>"
        assert strip_summary_html(text) == "A bold and italic story."

    def test_line_break_becomes_newline(self):
        assert strip_summary_html("One<br>Two") == "One\nTwo"

    def test_self_closing_breaks_removed(self):
        assert strip_summary_html("One<br />Two<br/>Three") == "OneTwoThree"

    def test_lists_and_divs(self):
        text = "<div><ul><li>First</li><li>Second</li></ul>"
        assert strip_summary_html(text) == "FirstSecond"

    def test_case_insensitive_tags(self):
        assert strip_summary_html("<P>Text</P>") == "Text"

    def test_unknown_tags_left_alone(self):
        assert strip_summary_html("<span>x</span>") == "<span>x</span>"


class TestParseSeriesName:
    """Tests for parse_series_name function."""

    def test_name_with_year(self):
        assert parse_series_name("Doctor Who (2005)") == ("Doctor Who", 2005)

    def test_name_without_year(self):
        assert parse_series_name("  Firefly ") == ("Firefly", None)

    def test_year_only_is_not_split(self):
        assert parse_series_name("(2005)") == ("(2005)", None)

    def test_year_in_middle_is_kept(self):
        assert parse_series_name("1983 (Remake) Show") == ("1983 (Remake) Show", None)
