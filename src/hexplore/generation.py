"""Terrain generation: ratio-guided category choice and local rule filtering.

`generate` is a pure function of its arguments. It reads neighbouring tiles
and ratio counters but never mutates them; the store applies the result.
"""

import math
from typing import TYPE_CHECKING, Mapping

from .config import DifficultyProfile
from .hexgrid import Hex, neighbors, ring
from .rng import stream_for
from .terrain_types import TYPES_BY_CATEGORY, Category, TerrainType

if TYPE_CHECKING:
    from .state import RatioCounters, Tile


DEFAULT_BIOME_FRACTION = 0.35

# Rings scanned when looking for the nearest biome
BIOME_SEARCH_RADIUS = 6

# (upper bound, inclusive?, pBiome), checked in order
_BIAS_TABLE: tuple[tuple[float, bool, float], ...] = (
    (0.30, False, 0.55),
    (0.35, False, 0.45),
    (0.40, True, 0.30),
)
_BIAS_ABOVE_BAND = 0.20

# Type -> identical-neighbour count at which the type is rejected
_SAME_TYPE_LIMITS: dict[TerrainType, int] = {
    TerrainType.LAC: 5,
    TerrainType.MER_D_OMBRE: 5,
    TerrainType.CITE_FANTOME: 3,
}


def biome_bias(biome_fraction: float) -> float:
    """Probability of drawing a biome given the current biome fraction.

    Pushes the long-run fraction back into the 30-40% band.
    """
    for upper, inclusive, p_biome in _BIAS_TABLE:
        if biome_fraction < upper or (inclusive and biome_fraction == upper):
            return p_biome
    return _BIAS_ABOVE_BAND


def nearest_biome_distance(
    coord: Hex,
    world_view: Mapping[Hex, "Tile"],
    max_radius: int = BIOME_SEARCH_RADIUS,
) -> float:
    """Distance to the nearest generated biome tile other than coord itself.

    Scans rings outward from the first ring and stops at the first one
    containing a biome. A tile already stored at coord (the one being
    rerolled) is ignored. Returns math.inf if none lies within max_radius.
    """
    for radius in range(1, max_radius + 1):
        for candidate in ring(coord, radius):
            tile = world_view.get(candidate)
            if tile is not None and tile.terrain.is_biome:
                return radius
    return math.inf


def violates_local_rules(
    candidate: TerrainType,
    neighbor_types: list[TerrainType],
    profile: DifficultyProfile,
) -> bool:
    """Check a candidate type against its generated neighbours."""
    limit = _SAME_TYPE_LIMITS.get(candidate)
    if limit is not None and neighbor_types.count(candidate) >= limit:
        return True

    same_category = sum(1 for t in neighbor_types if t.category is candidate.category)
    if candidate.is_biome:
        if profile.max_biome_blob is not None and same_category >= profile.max_biome_blob:
            return True
    elif profile.max_desert_blob is not None and same_category >= profile.max_desert_blob:
        return True

    if profile.isolate_oasis and candidate.is_biome:
        if candidate is TerrainType.OASIS and same_category > 0:
            return True
        if TerrainType.OASIS in neighbor_types:
            return True

    return False


def generate(
    coord: Hex,
    seed: str,
    move_id: int,
    reroll_nonce: int,
    world_view: Mapping[Hex, "Tile"],
    counters: "RatioCounters",
    profile: DifficultyProfile,
) -> TerrainType:
    """Choose the terrain type for an ungenerated coordinate.

    Args:
        coord: Coordinate to generate.
        seed: Base seed of the world.
        move_id: Move during which the tile is generated.
        reroll_nonce: Reroll counter for that move.
        world_view: Already generated tiles.
        counters: Category counts across the whole map.
        profile: Active difficulty profile.

    Returns:
        The chosen TerrainType. Never fails: if every candidate breaks a
        local rule, the first candidate of the random order is used.
    """
    stream = stream_for(seed, move_id, reroll_nonce, coord.q, coord.r)

    # Step 1: ratio-guided category
    p_biome = biome_bias(counters.biome_fraction)
    category = Category.BIOME if stream.random() < p_biome else Category.DESERT

    # Step 2: desert gap override
    if profile.max_desert_gap is not None and category is Category.DESERT:
        if nearest_biome_distance(coord, world_view) > profile.max_desert_gap:
            category = Category.BIOME

    # Step 3: first candidate passing local rules
    candidates = stream.permutation(TYPES_BY_CATEGORY[category])
    neighbor_types = [
        world_view[n].terrain for n in neighbors(coord) if n in world_view
    ]
    for candidate in candidates:
        if not violates_local_rules(candidate, neighbor_types, profile):
            return candidate
    return candidates[0]
