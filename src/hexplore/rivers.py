"""Stochastic river growth across generated terrain.

Rivers grow one node at a time, at most once per explorer move. A river is
stored tip-first: nodes[0] is the current tip, nodes[-1] the source. Rivers
never merge, never lose nodes, and a finished river is never touched again.
"""

from dataclasses import dataclass, field
from typing import Mapping

import structlog

from .config import RiverConfig
from .hexgrid import Hex, neighbors, ring
from .rng import RIVER_NAMESPACE, RandomStream, stream_for
from .state import Tile
from .terrain_types import RIVER_TERMINAL_TYPE, TerrainType

logger = structlog.get_logger()


@dataclass
class River:
    """A river path with its growth state."""

    nodes: list[Hex]  # Tip first, source last
    finished: bool = False

    @property
    def tip(self) -> Hex:
        return self.nodes[0]

    @property
    def source(self) -> Hex:
        return self.nodes[-1]

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class RiverEvent:
    """What a river attempt did."""

    kind: str  # "started", "extended" or "finished"
    river_index: int
    node: Hex | None = None


@dataclass
class SourceBuckets:
    """Candidate river sources around the explorer, by terrain."""

    mountains: list[Hex] = field(default_factory=list)
    black_mountains: list[Hex] = field(default_factory=list)
    passable: list[Hex] = field(default_factory=list)


def occupied_nodes(rivers: list[River]) -> set[Hex]:
    """All coordinates already carrying a river."""
    return {node for river in rivers for node in river.nodes}


def extension_candidates(
    river: River,
    tiles: Mapping[Hex, Tile],
    occupied: set[Hex],
) -> list[Hex]:
    """Generated river-passable neighbours of the tip not already on a river."""
    candidates = []
    for n in neighbors(river.tip):
        tile = tiles.get(n)
        if tile is not None and tile.terrain.river_passable and n not in occupied:
            candidates.append(n)
    return candidates


def extend_river(
    river: River,
    tiles: Mapping[Hex, Tile],
    occupied: set[Hex],
    stream: RandomStream,
) -> Hex | None:
    """Grow a river by one node from its tip.

    The river is finished when the new node is the terminal type, or when
    no candidate exists (in which case no node is added).

    Returns:
        The new tip, or None if the river could not grow.
    """
    if river.finished:
        return None

    candidates = extension_candidates(river, tiles, occupied)
    if not candidates:
        river.finished = True
        return None

    node = stream.choice(candidates)
    river.nodes.insert(0, node)
    if tiles[node].terrain is RIVER_TERMINAL_TYPE:
        river.finished = True
    return node


def collect_sources(
    center: Hex,
    tiles: Mapping[Hex, Tile],
    occupied: set[Hex],
    max_radius: int,
) -> SourceBuckets:
    """Bucket generated tiles within max_radius of center as river sources."""
    buckets = SourceBuckets()
    for radius in range(max_radius + 1):
        for position in ring(center, radius):
            tile = tiles.get(position)
            if tile is None or position in occupied:
                continue
            if tile.terrain is TerrainType.MONT:
                buckets.mountains.append(position)
            elif tile.terrain is TerrainType.MONT_NOIR:
                buckets.black_mountains.append(position)
            elif tile.terrain.river_passable and tile.terrain is not RIVER_TERMINAL_TYPE:
                buckets.passable.append(position)
    return buckets


def select_source(
    buckets: SourceBuckets,
    stream: RandomStream,
    config: RiverConfig,
) -> Hex | None:
    """Pick a bucket by weighted draw, then a source from it uniformly.

    Returns:
        The source coordinate, or None if the chosen bucket is empty.
    """
    roll = stream.random()
    if roll < config.mountain_source_threshold:
        bucket = buckets.mountains
    elif roll < config.black_mountain_source_threshold:
        bucket = buckets.black_mountains
    else:
        bucket = buckets.passable

    if not bucket:
        return None
    return stream.choice(bucket)


def attempt_river_growth(
    rivers: list[River],
    tiles: Mapping[Hex, Tile],
    position: Hex,
    seed: str,
    move_id: int,
    config: RiverConfig,
) -> RiverEvent | None:
    """Give the rivers one chance to grow after a move.

    Mutates `rivers` in place: either extends one unfinished river or
    appends a new single-node river.

    Returns:
        The event that happened, or None if nothing changed.
    """
    stream = stream_for(seed, move_id, 0, position.q, position.r, namespace=RIVER_NAMESPACE)

    if stream.random() >= config.attempt_probability:
        return None

    occupied = occupied_nodes(rivers)
    unfinished = [i for i, river in enumerate(rivers) if not river.finished]
    extend_roll = stream.random()

    if unfinished and extend_roll < config.extend_probability:
        index = stream.choice(unfinished)
        river = rivers[index]
        node = extend_river(river, tiles, occupied, stream)
        if node is None:
            logger.info("river_finished", river_index=index, length=len(river))
            return RiverEvent(kind="finished", river_index=index)
        if river.finished:
            logger.info(
                "river_finished", river_index=index, length=len(river), mouth=str(node)
            )
            return RiverEvent(kind="finished", river_index=index, node=node)
        logger.debug("river_extended", river_index=index, tip=str(node))
        return RiverEvent(kind="extended", river_index=index, node=node)

    buckets = collect_sources(position, tiles, occupied, config.source_search_radius)
    source = select_source(buckets, stream, config)
    if source is None:
        return None

    rivers.append(River(nodes=[source]))
    logger.info("river_started", river_index=len(rivers) - 1, source=str(source))
    return RiverEvent(kind="started", river_index=len(rivers) - 1, node=source)
