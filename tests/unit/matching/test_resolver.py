"""Tests for the episode resolution cascade."""

import logging
from unittest.mock import AsyncMock

import pytest

from tvmaze_metadata.catalog.client import TvMazeConnectionError
from tvmaze_metadata.catalog.models import EpisodeKind
from tvmaze_metadata.matching.models import (
    AmbiguousMatch,
    LocalEpisodeSignal,
    NoMatch,
    SeasonPosition,
    UniqueMatch,
)
from tvmaze_metadata.matching.resolver import (
    MAX_AMBIGUOUS_EXAMPLES,
    EpisodeResolver,
    match_by_filename,
    match_by_id_tag,
    match_by_number,
    narrow_by_airdate,
    narrow_by_name,
)

SHOW_ID = 82


@pytest.fixture
def fetch(catalog) -> AsyncMock:
    return AsyncMock(return_value=catalog)


@pytest.fixture
def resolver(fetch) -> EpisodeResolver:
    return EpisodeResolver(fetch)


def signal(path=None, season=None, episode=None) -> LocalEpisodeSignal:
    return LocalEpisodeSignal(
        show_id=SHOW_ID, season=season, episode=episode, path=path
    )


class TestMatchByNumber:
    """Tests for the numeric stage."""

    def test_exact_pair(self, catalog):
        assert match_by_number(catalog, 2, 2).id == 202

    def test_missing_number(self, catalog):
        assert match_by_number(catalog, 1, None) is None
        assert match_by_number(catalog, None, 1) is None

    def test_season_zero_never_matches(self, make_episode):
        episodes = (make_episode(1, season=0, number=1),)
        assert match_by_number(episodes, 0, 1) is None

    def test_no_such_pair(self, catalog):
        assert match_by_number(catalog, 3, 1) is None


class TestFilenameStages:
    """Tests for the individual filename stages."""

    def test_airdate_unique(self, catalog):
        candidates, episode = narrow_by_airdate(catalog, "Show.2020-01-08")
        assert episode.id == 102
        assert len(candidates) == 1

    def test_airdate_several_keeps_narrowed_set(self, catalog):
        candidates, episode = narrow_by_airdate(catalog, "Show.2021-03-01")
        assert episode is None
        assert [e.id for e in candidates] == [201, 202]

    def test_airdate_without_match_is_ignored(self, catalog):
        candidates, episode = narrow_by_airdate(catalog, "Show.1999-01-01")
        assert episode is None
        assert candidates is catalog

    def test_airdate_without_date(self, catalog):
        assert narrow_by_airdate(catalog, "Show.Pilot") == (catalog, None)

    def test_id_tag(self, catalog):
        _, episode = match_by_id_tag(catalog, "anything [tvmazeid-201]")
        assert episode.id == 201

    def test_id_tag_case_insensitive(self, catalog):
        _, episode = match_by_id_tag(catalog, "anything [TVmazeID-201]")
        assert episode.id == 201

    def test_id_tag_unknown_id(self, catalog):
        assert match_by_id_tag(catalog, "[tvmazeid-999]") == (catalog, None)

    def test_name_narrows(self, catalog):
        candidates, episode = narrow_by_name(catalog, "Show - new_beginnings")
        assert episode is None
        assert [e.id for e in candidates] == [201]

    def test_name_without_hit_keeps_candidates(self, catalog):
        candidates, _ = narrow_by_name(catalog, "unrelated")
        assert candidates is catalog


class TestResolveNumeric:
    """Tests for the numeric short-circuit."""

    @pytest.mark.asyncio
    async def test_numeric_match_ignores_filename(self, resolver):
        """A numeric hit wins even if the filename points elsewhere."""
        outcome = await resolver.resolve(
            signal("Pilot.2020-01-01 [tvmazeid-101].mkv", season=2, episode=2)
        )
        assert isinstance(outcome, UniqueMatch)
        assert outcome.episode.id == 202
        assert (outcome.season, outcome.number) == (2, 2)
        assert outcome.position is None

    @pytest.mark.asyncio
    async def test_season_zero_falls_back_to_filename(self, resolver):
        outcome = await resolver.resolve(
            signal("Show - Holiday Special.mkv", season=0, episode=1)
        )
        assert outcome.episode.id == 103


class TestResolveByFilename:
    """Tests for the filename fallback stages."""

    @pytest.mark.asyncio
    async def test_date_match_with_mismatching_numbers(self, resolver):
        outcome = await resolver.resolve(
            signal("Show.S01E05.2020-01-08.mkv", season=1, episode=5)
        )
        assert outcome.episode.id == 102

    @pytest.mark.asyncio
    async def test_several_date_matches_fall_through_to_names(self, resolver):
        outcome = await resolver.resolve(signal("Show.2021-03-01.Double.Trouble.mkv"))
        assert outcome.episode.id == 202

    @pytest.mark.asyncio
    async def test_several_date_matches_without_name_are_ambiguous(self, resolver):
        outcome = await resolver.resolve(signal("Show.2021-03-01.mkv"))
        assert isinstance(outcome, AmbiguousMatch)
        assert outcome.total == 2
        assert [ep_id for _, ep_id in outcome.candidates] == [201, 202]

    @pytest.mark.asyncio
    async def test_unmatched_date_is_ignored(self, resolver):
        outcome = await resolver.resolve(signal("Show.1999-01-01.Pilot.mkv"))
        assert outcome.episode.id == 101

    @pytest.mark.asyncio
    async def test_id_tag_resolves_regardless_of_name(self, resolver):
        outcome = await resolver.resolve(signal("The Return [tvmazeid-201].mkv"))
        assert outcome.episode.id == 201

    @pytest.mark.asyncio
    async def test_unknown_id_tag_falls_through_to_names(self, resolver):
        outcome = await resolver.resolve(signal("Pilot [tvmazeid-999].mkv"))
        assert outcome.episode.id == 101

    @pytest.mark.asyncio
    async def test_name_match_ignores_separators_and_case(self, resolver):
        outcome = await resolver.resolve(signal("/tv/Show/show_-_new.beginnings.mkv"))
        assert outcome.episode.id == 201

    @pytest.mark.asyncio
    async def test_single_episode_show_matches_anything(self, make_episode):
        only = make_episode(7, "Miniseries", season=1, number=1)
        resolver = EpisodeResolver(AsyncMock(return_value=(only,)))
        outcome = await resolver.resolve(signal("whatever.mkv"))
        assert outcome.episode is only

    @pytest.mark.asyncio
    async def test_windows_path_matches_by_name(self, resolver):
        outcome = await resolver.resolve(signal(r"C:\tv\Show\Pilot.mkv"))
        assert outcome.episode.id == 101

    @pytest.mark.asyncio
    async def test_windows_path_ignores_directory_names(self, resolver):
        outcome = await resolver.resolve(
            signal(r"D:\Media\New Beginnings\Double.Trouble.mkv")
        )
        assert outcome.episode.id == 202


class TestLocalEpisodeSignal:
    """Tests for filename parts taken from host paths."""

    @pytest.mark.parametrize(
        ("path", "stem", "suffix"),
        [
            ("/tv/Show/Pilot.mkv", "Pilot", ".mkv"),
            (r"C:\tv\Show\Pilot.mkv", "Pilot", ".mkv"),
            (r"\\nas\tv\Show\The.Return.avi", "The.Return", ".avi"),
            ("Pilot", "Pilot", ""),
            (None, "", ""),
        ],
    )
    def test_filename_parts(self, path, stem, suffix):
        local = signal(path)
        assert local.filename_stem == stem
        assert local.filename_suffix == suffix

    @pytest.mark.asyncio
    async def test_windows_path_suggestion_keeps_extension(self, resolver):
        outcome = await resolver.resolve(signal(r"C:\tv\The.Return.Part.2.mkv"))
        assert isinstance(outcome, AmbiguousMatch)
        assert outcome.suggested_filename == "The Return[tvmazeid-102].mkv"


class TestResolveAmbiguous:
    """Tests for ambiguity reporting."""

    @pytest.mark.asyncio
    async def test_two_names_in_filename(self, resolver, caplog):
        caplog.set_level(logging.WARNING)
        outcome = await resolver.resolve(signal("/tv/Show/The.Return.Part.2.mkv"))

        assert isinstance(outcome, AmbiguousMatch)
        assert outcome.total == 2
        assert outcome.candidates == (("The Return", 102), ("The Return Part 2", 203))
        assert outcome.suggested_filename == "The Return[tvmazeid-102].mkv"
        assert outcome.path == "/tv/Show/The.Return.Part.2.mkv"
        assert "tvmazeid-" in caplog.text
        record = caplog.records[-1]
        assert record.candidates == [102, 203]
        assert record.total == 2
        assert record.suggested_filename == "The Return[tvmazeid-102].mkv"

    @pytest.mark.asyncio
    async def test_no_name_hit_reports_every_episode(self, resolver, catalog):
        outcome = await resolver.resolve(signal("unrelated.mkv"))
        assert isinstance(outcome, AmbiguousMatch)
        assert outcome.total == len(catalog)

    @pytest.mark.asyncio
    async def test_candidate_list_capped(self, make_episode):
        episodes = tuple(
            make_episode(i, "Part", season=1, number=i) for i in range(1, 16)
        )
        resolver = EpisodeResolver(AsyncMock(return_value=episodes))
        outcome = await resolver.resolve(signal("Part.mkv"))

        assert outcome.total == 15
        assert len(outcome.candidates) == MAX_AMBIGUOUS_EXAMPLES == 10

    def test_describe(self):
        outcome = AmbiguousMatch(
            candidates=(("A", 1), ("B", 2)),
            total=2,
            suggested_filename="A[tvmazeid-1].mkv",
            path="x.mkv",
        )
        message = outcome.describe()
        assert "'x.mkv'" in message
        assert "A(ID: 1), B(ID: 2)" in message
        assert "'A[tvmazeid-1].mkv'" in message


class TestResolveNoMatch:
    """Tests for explicit no-match outcomes."""

    @pytest.mark.asyncio
    async def test_no_show_id(self, fetch):
        resolver = EpisodeResolver(fetch)
        outcome = await resolver.resolve(LocalEpisodeSignal(show_id=None, path="a.mkv"))
        assert isinstance(outcome, NoMatch)
        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_filename_after_numeric_miss(self, resolver):
        outcome = await resolver.resolve(signal(season=9, episode=9))
        assert isinstance(outcome, NoMatch)

    @pytest.mark.asyncio
    async def test_show_without_episodes(self):
        resolver = EpisodeResolver(AsyncMock(return_value=()))
        outcome = await resolver.resolve(signal("Pilot.mkv"))
        assert outcome == NoMatch("show has no episodes")

    def test_match_by_filename_without_path(self, catalog):
        assert isinstance(match_by_filename(catalog, signal()), NoMatch)


class TestResolveKinds:
    """Tests for numbering by episode kind."""

    @pytest.mark.asyncio
    async def test_significant_special(self, resolver):
        outcome = await resolver.resolve(signal("Holiday Special.mkv"))
        assert (outcome.season, outcome.number) == (0, 0)
        assert outcome.position == SeasonPosition(airs_after_season=1)

    @pytest.mark.asyncio
    async def test_insignificant_special(self, resolver):
        outcome = await resolver.resolve(signal("x [tvmazeid-104].mkv"))
        assert (outcome.season, outcome.number) == (0, 1)
        assert outcome.position is None

    @pytest.mark.asyncio
    async def test_unknown_kind_matched_by_number_keeps_numbers(
        self, make_episode, caplog
    ):
        """Numbers that found the episode are kept; only position stays unset."""
        odd = make_episode(5, "Oddity", season=1, number=3, kind=EpisodeKind.UNKNOWN)
        resolver = EpisodeResolver(AsyncMock(return_value=(odd,)))
        outcome = await resolver.resolve(signal(season=1, episode=3))

        assert isinstance(outcome, UniqueMatch)
        assert outcome.episode is odd
        assert (outcome.season, outcome.number) == (1, 3)
        assert outcome.position is None
        assert "unknown episode type" in caplog.text

    @pytest.mark.asyncio
    async def test_unknown_kind_matched_by_filename_leaves_numbers_unset(
        self, make_episode
    ):
        odd = make_episode(5, "Oddity", season=1, number=3, kind=EpisodeKind.UNKNOWN)
        resolver = EpisodeResolver(AsyncMock(return_value=(odd,)))
        outcome = await resolver.resolve(signal("Show - Oddity.mkv"))

        assert isinstance(outcome, UniqueMatch)
        assert outcome.episode is odd
        assert outcome.season is None
        assert outcome.number is None
        assert outcome.position is None


class TestResolverCollaborators:
    """Tests for fetch and cache interaction."""

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self):
        fetch = AsyncMock(side_effect=TvMazeConnectionError("down"))
        resolver = EpisodeResolver(fetch)
        with pytest.raises(TvMazeConnectionError):
            await resolver.resolve(signal("Pilot.mkv"))

    @pytest.mark.asyncio
    async def test_episode_list_cached_between_lookups(self, resolver, fetch):
        await resolver.resolve(signal(season=1, episode=1))
        await resolver.resolve(signal(season=1, episode=2))
        fetch.assert_awaited_once_with(SHOW_ID)
