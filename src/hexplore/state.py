"""World map state: generated tiles, ratio counters and batch generation."""

from dataclasses import dataclass
from typing import Mapping

import structlog
from pydantic import BaseModel, PrivateAttr

from .config import DifficultyProfile
from .exceptions import TileAlreadyExistsError, TileNotFoundError
from .generation import DEFAULT_BIOME_FRACTION, generate
from .hexgrid import Hex, disk_around
from .terrain_types import Category, TerrainType

logger = structlog.get_logger()


class Tile(BaseModel, frozen=True):
    """Immutable generated tile."""

    position: Hex
    terrain: TerrainType
    move_id: int = 0

    @property
    def category(self) -> Category:
        return self.terrain.category

    def with_terrain(self, terrain: TerrainType) -> "Tile":
        """Return copy with a new terrain type, same position and move id."""
        return self.model_copy(update={"terrain": terrain})


@dataclass
class RatioCounters:
    """Running tile counts per category, input to the ratio controller."""

    biome: int = 0
    desert: int = 0

    @property
    def total(self) -> int:
        return self.biome + self.desert

    @property
    def biome_fraction(self) -> float:
        """Share of biome tiles, DEFAULT_BIOME_FRACTION when empty."""
        if self.total == 0:
            return DEFAULT_BIOME_FRACTION
        return self.biome / self.total

    def record(self, category: Category) -> None:
        """Count one newly generated tile."""
        if category is Category.BIOME:
            self.biome += 1
        else:
            self.desert += 1


class WorldMap(BaseModel):
    """
    Mutable mapping from coordinate to generated tile.

    Grows only: tiles are added for absent coordinates and their terrain may
    be replaced by a reroll, but coordinates are never removed.
    """

    _tiles: dict[Hex, Tile] = PrivateAttr(default_factory=dict)

    def get_tile(self, position: Hex) -> Tile:
        """Get tile at position.

        Raises:
            TileNotFoundError: If position has not been generated.
        """
        if position not in self._tiles:
            raise TileNotFoundError(f"No tile generated at {position}")
        return self._tiles[position]

    def has_tile(self, position: Hex) -> bool:
        return position in self._tiles

    def add_tile(self, tile: Tile) -> None:
        """Insert a new tile.

        Raises:
            TileAlreadyExistsError: If position already has a tile.
        """
        if tile.position in self._tiles:
            raise TileAlreadyExistsError(f"Tile at {tile.position} already exists")
        self._tiles[tile.position] = tile

    def replace_terrain(self, position: Hex, terrain: TerrainType) -> Tile:
        """Overwrite the terrain of an existing tile in place.

        Raises:
            TileNotFoundError: If position has not been generated.
        """
        tile = self.get_tile(position).with_terrain(terrain)
        self._tiles[position] = tile
        return tile

    def tiles_for_move(self, move_id: int) -> list[Tile]:
        """Tiles created during a move, in creation order."""
        return [t for t in self._tiles.values() if t.move_id == move_id]

    def all_tiles(self) -> Mapping[Hex, Tile]:
        """Return read-only view of all tiles, in creation order."""
        return self._tiles

    def tile_count(self) -> int:
        """Return number of generated tiles."""
        return len(self._tiles)

    def __contains__(self, position: object) -> bool:
        return position in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)


def ensure_generated(
    world: WorldMap,
    center: Hex,
    radius: int,
    seed: str,
    move_id: int,
    reroll_nonce: int,
    counters: RatioCounters,
    profile: DifficultyProfile,
) -> list[Tile]:
    """Generate every missing coordinate within radius of center.

    Tiles are generated in disk order; each one is inserted and counted
    before the next is chosen, so later tiles see earlier ones.

    Returns:
        The newly inserted tiles.
    """
    created: list[Tile] = []
    for position in disk_around(center, radius):
        if position in world:
            continue
        terrain = generate(
            position,
            seed,
            move_id,
            reroll_nonce,
            world.all_tiles(),
            counters,
            profile,
        )
        tile = Tile(position=position, terrain=terrain, move_id=move_id)
        world.add_tile(tile)
        counters.record(terrain.category)
        created.append(tile)

    if created:
        logger.debug(
            "tiles_generated",
            center=str(center),
            move_id=move_id,
            count=len(created),
        )
    return created


def reroll_move(
    world: WorldMap,
    seed: str,
    move_id: int,
    reroll_nonce: int,
    counters: RatioCounters,
    profile: DifficultyProfile,
) -> list[Tile]:
    """Regenerate the terrain of every tile created during move_id.

    Tiles from other moves are never touched and no coordinate is added.
    Counters are left as they are. A move with no tiles is a no-op.

    Returns:
        The rerolled tiles with their new terrain.
    """
    rerolled: list[Tile] = []
    for tile in world.tiles_for_move(move_id):
        terrain = generate(
            tile.position,
            seed,
            move_id,
            reroll_nonce,
            world.all_tiles(),
            counters,
            profile,
        )
        rerolled.append(world.replace_terrain(tile.position, terrain))

    logger.debug(
        "move_tiles_rerolled",
        move_id=move_id,
        reroll_nonce=reroll_nonce,
        count=len(rerolled),
    )
    return rerolled
