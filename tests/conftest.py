"""Shared test fixtures for tvmaze-metadata."""

from __future__ import annotations

import logging

import pytest

from tvmaze_metadata.catalog.models import EpisodeKind, RemoteEpisode
from tvmaze_metadata.config.loader import clear_config_cache


def _make_episode(
    episode_id: int,
    name: str = "",
    season: int | None = 1,
    number: int | None = None,
    kind: EpisodeKind = EpisodeKind.REGULAR,
    airdate: str = "",
    **kwargs,
) -> RemoteEpisode:
    """Build a RemoteEpisode with test-friendly defaults."""
    return RemoteEpisode(
        id=episode_id,
        name=name or f"Episode {episode_id}",
        season=season,
        number=number,
        kind=kind,
        airdate=airdate,
        **kwargs,
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def make_episode():
    """Return the RemoteEpisode factory."""
    return _make_episode


@pytest.fixture
def clock() -> FakeClock:
    """Return a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def catalog() -> tuple[RemoteEpisode, ...]:
    """A small show in catalog air order, with specials between seasons."""
    return (
        _make_episode(101, "Pilot", season=1, number=1, airdate="2020-01-01"),
        _make_episode(102, "The Return", season=1, number=2, airdate="2020-01-08"),
        _make_episode(
            103,
            "Holiday Special",
            season=1,
            kind=EpisodeKind.SIGNIFICANT_SPECIAL,
            airdate="2020-12-24",
        ),
        _make_episode(
            104,
            "Behind the Scenes",
            season=1,
            kind=EpisodeKind.INSIGNIFICANT_SPECIAL,
            airdate="2020-12-31",
        ),
        _make_episode(201, "New Beginnings", season=2, number=1, airdate="2021-03-01"),
        _make_episode(202, "Double Trouble", season=2, number=2, airdate="2021-03-01"),
        _make_episode(
            203, "The Return Part 2", season=2, number=3, airdate="2021-03-08"
        ),
    )


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Keep the config file cache from leaking between tests."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
