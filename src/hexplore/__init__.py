"""Procedural hex exploration map core."""

from .config import (
    BUILTIN_PROFILES,
    DifficultyProfile,
    ExplorerConfig,
    RiverConfig,
    load_config,
)
from .exceptions import (
    HexploreError,
    InvalidConfigurationError,
    InvalidDirectionError,
    TileAlreadyExistsError,
    TileNotFoundError,
    UnknownTerrainError,
)
from .generation import generate
from .hexgrid import (
    DIRECTION_DELTAS,
    ORIGIN,
    Direction,
    Hex,
    disk_around,
    distance,
    neighbors,
    ring,
)
from .rivers import River, RiverEvent, attempt_river_growth
from .rng import RandomStream, stream_for
from .session import ExplorerSession, ExplorerState, MoveResult, TileView
from .state import RatioCounters, Tile, WorldMap, ensure_generated, reroll_move
from .terrain_types import Category, PaletteGroup, TerrainType
from .visibility import is_visible, visibility_mask

__all__ = [
    # Coordinates
    "Direction",
    "Hex",
    "ORIGIN",
    "DIRECTION_DELTAS",
    "distance",
    "neighbors",
    "ring",
    "disk_around",
    # RNG
    "RandomStream",
    "stream_for",
    # Terrain
    "Category",
    "PaletteGroup",
    "TerrainType",
    # Generation and state
    "generate",
    "Tile",
    "RatioCounters",
    "WorldMap",
    "ensure_generated",
    "reroll_move",
    # Visibility
    "is_visible",
    "visibility_mask",
    # Rivers
    "River",
    "RiverEvent",
    "attempt_river_growth",
    # Session
    "ExplorerSession",
    "ExplorerState",
    "MoveResult",
    "TileView",
    # Config
    "BUILTIN_PROFILES",
    "DifficultyProfile",
    "ExplorerConfig",
    "RiverConfig",
    "load_config",
    # Exceptions
    "HexploreError",
    "InvalidConfigurationError",
    "InvalidDirectionError",
    "TileAlreadyExistsError",
    "TileNotFoundError",
    "UnknownTerrainError",
]
