"""Shared test fixtures for hexplore tests."""

import pytest

from hexplore.config import BUILTIN_PROFILES, DifficultyProfile, ExplorerConfig
from hexplore.hexgrid import Hex
from hexplore.session import ExplorerSession
from hexplore.state import RatioCounters, Tile, WorldMap
from hexplore.terrain_types import TerrainType


@pytest.fixture
def open_profile() -> DifficultyProfile:
    """Profile with every optional rule disabled."""
    return DifficultyProfile(name="open")


@pytest.fixture
def normal_profile() -> DifficultyProfile:
    return BUILTIN_PROFILES["normal"]


@pytest.fixture
def empty_world() -> WorldMap:
    return WorldMap()


@pytest.fixture
def counters() -> RatioCounters:
    return RatioCounters()


@pytest.fixture
def origin_world() -> WorldMap:
    """World holding a single forest tile at the origin."""
    world = WorldMap()
    world.add_tile(Tile(position=Hex(q=0, r=0), terrain=TerrainType.FORET))
    return world


@pytest.fixture
def session() -> ExplorerSession:
    """Fresh session on seed 'test-1' with a forest origin."""
    return ExplorerSession(ExplorerConfig(seed="test-1"))


def make_world(tiles: dict[tuple[int, int], TerrainType], move_id: int = 0) -> WorldMap:
    """Build a world from {(q, r): terrain}."""
    world = WorldMap()
    for (q, r), terrain in tiles.items():
        world.add_tile(Tile(position=Hex(q=q, r=r), terrain=terrain, move_id=move_id))
    return world
