"""Fog-of-war visibility."""

from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from .hexgrid import Hex, distance
from .state import Tile

# Mountains can be seen this many hexes past the vision radius
MOUNTAIN_VISION_BONUS = 2


def visible_range(tile: Tile, vision_radius: int) -> int:
    """Farthest distance from which a tile can be seen."""
    if tile.terrain.is_mountain:
        return vision_radius + MOUNTAIN_VISION_BONUS
    return vision_radius


def is_visible(
    tile: Tile,
    explorer_position: Hex,
    vision_radius: int,
    fog_enabled: bool,
) -> bool:
    """Whether a tile is currently observable by the explorer."""
    if not fog_enabled:
        return True
    return distance(tile.position, explorer_position) <= visible_range(tile, vision_radius)


def visibility_mask(
    tiles: Iterable[Tile],
    explorer_position: Hex,
    vision_radius: int,
    fog_enabled: bool,
) -> NDArray[np.bool_]:
    """Vectorized is_visible over many tiles.

    Returns:
        Boolean array aligned with the iteration order of tiles.
    """
    tiles = list(tiles)
    if not fog_enabled:
        return np.ones(len(tiles), dtype=bool)
    if not tiles:
        return np.zeros(0, dtype=bool)

    q = np.fromiter((t.position.q for t in tiles), dtype=np.int64, count=len(tiles))
    r = np.fromiter((t.position.r for t in tiles), dtype=np.int64, count=len(tiles))
    mountain = np.fromiter(
        (t.terrain.is_mountain for t in tiles), dtype=bool, count=len(tiles)
    )

    dq = q - explorer_position.q
    dr = r - explorer_position.r
    dist = np.maximum(np.maximum(np.abs(dq), np.abs(dr)), np.abs(dq + dr))

    limit = np.where(mountain, vision_radius + MOUNTAIN_VISION_BONUS, vision_radius)
    return dist <= limit
