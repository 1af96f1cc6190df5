"""Explorer session: moves, rerolls and configuration around one world map."""

from collections import deque
from dataclasses import dataclass, field

import structlog

from .config import VISION_RADII, DifficultyProfile, ExplorerConfig
from .exceptions import InvalidConfigurationError
from .hexgrid import ORIGIN, Direction, Hex
from .rivers import River, RiverEvent, attempt_river_growth
from .state import RatioCounters, Tile, WorldMap, ensure_generated, reroll_move
from .terrain_types import Category, TerrainType
from .visibility import visibility_mask

logger = structlog.get_logger()

TRAIL_LENGTH = 6


@dataclass
class ExplorerState:
    """Position and move bookkeeping of the explorer token."""

    position: Hex
    move_id: int = 0
    reroll_nonce: int = 0
    trail: deque[Hex] = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))


@dataclass
class MoveResult:
    """Result of a single explorer move."""

    from_pos: Hex
    to_pos: Hex
    move_id: int
    new_tiles: list[Tile]
    river_event: RiverEvent | None = None


@dataclass(frozen=True)
class TileView:
    """A generated tile with its current visibility."""

    tile: Tile
    visible: bool


class ExplorerSession:
    """
    Single-explorer world model.

    Owns the world map, ratio counters, rivers and explorer state. All
    operations are synchronous; callers must serialize access.

    Usage:
        session = ExplorerSession(ExplorerConfig(seed="test-1"))
        session.move(Direction.EAST)
        session.reroll_last_move()
        for view in session.tile_views():
            ...
    """

    def __init__(self, config: ExplorerConfig | None = None, position: Hex = ORIGIN):
        self.config = config if config is not None else ExplorerConfig()
        self._profile = self.config.get_profile(self.config.difficulty)
        self._fog_enabled = self.config.fog_enabled
        self._vision_radius = self.config.vision_radius
        self._reset(self.config.seed, position)

    @classmethod
    def from_config(cls, config: ExplorerConfig) -> "ExplorerSession":
        """Create a session at the origin from configuration."""
        return cls(config)

    def _reset(self, seed: str, position: Hex) -> None:
        """Replace the whole world with a single origin tile at position."""
        world = WorldMap()
        origin = Tile(position=position, terrain=self.config.origin_type, move_id=0)
        world.add_tile(origin)
        counters = RatioCounters()
        counters.record(origin.category)
        state = ExplorerState(position=position)

        # Swap everything in at once
        self._seed, self._world, self._counters, self._rivers, self._state = (
            seed,
            world,
            counters,
            [],
            state,
        )

    # --- Explorer operations ---

    def move(self, direction: Direction | str) -> MoveResult:
        """Move the explorer one hex and grow the map around it.

        Raises:
            InvalidDirectionError: If direction is a string naming no direction.
        """
        if isinstance(direction, str):
            direction = Direction.parse(direction)

        state = self._state
        from_pos = state.position
        to_pos = from_pos.offset(direction)

        state.trail.append(from_pos)
        state.position = to_pos
        state.move_id += 1
        state.reroll_nonce = 0

        new_tiles = ensure_generated(
            self._world,
            to_pos,
            self.config.generation_radius,
            self._seed,
            state.move_id,
            state.reroll_nonce,
            self._counters,
            self._profile,
        )
        river_event = attempt_river_growth(
            self._rivers,
            self._world.all_tiles(),
            to_pos,
            self._seed,
            state.move_id,
            self.config.rivers,
        )

        logger.debug(
            "explorer_moved",
            direction=direction.name,
            to_pos=str(to_pos),
            move_id=state.move_id,
            new_tiles=len(new_tiles),
        )
        return MoveResult(
            from_pos=from_pos,
            to_pos=to_pos,
            move_id=state.move_id,
            new_tiles=new_tiles,
            river_event=river_event,
        )

    def reroll_last_move(self) -> list[Tile]:
        """Regenerate the tiles created by the current move.

        Older tiles, rivers and counters are left untouched. Before the first
        move there is nothing to reroll and this is a no-op.

        Returns:
            The rerolled tiles.
        """
        state = self._state
        if state.move_id == 0:
            logger.debug("reroll_skipped_no_move")
            return []

        nonce = state.reroll_nonce + 1
        rerolled = reroll_move(
            self._world,
            self._seed,
            state.move_id,
            nonce,
            self._counters,
            self._profile,
        )
        state.reroll_nonce = nonce

        logger.info(
            "move_rerolled",
            move_id=state.move_id,
            reroll_nonce=nonce,
            tiles=len(rerolled),
        )
        return rerolled

    def reroll_global(self, new_seed: str) -> None:
        """Discard the whole world and restart it under a new seed.

        The explorer keeps its position, which receives the origin tile.

        Raises:
            InvalidConfigurationError: If new_seed is not a string.
        """
        if not isinstance(new_seed, str):
            raise InvalidConfigurationError(f"Seed must be a string, got {new_seed!r}")
        self._reset(new_seed, self._state.position)
        logger.info("world_reset", seed=new_seed, position=str(self._state.position))

    # --- Configuration ---

    def set_difficulty(self, name: str) -> None:
        """Select the difficulty profile used for future generation.

        Raises:
            InvalidConfigurationError: If no profile has that name.
        """
        self._profile = self.config.get_profile(name)
        logger.info("difficulty_changed", profile=name)

    def set_fog(self, enabled: bool) -> None:
        """Enable or disable fog of war.

        Raises:
            InvalidConfigurationError: If enabled is not a bool.
        """
        if not isinstance(enabled, bool):
            raise InvalidConfigurationError(f"Fog flag must be a bool, got {enabled!r}")
        self._fog_enabled = enabled

    def set_vision_radius(self, radius: int) -> None:
        """Set the fog-of-war vision radius.

        Raises:
            InvalidConfigurationError: If radius is not 1, 2 or 3.
        """
        if isinstance(radius, bool) or radius not in VISION_RADII:
            raise InvalidConfigurationError(
                f"Vision radius must be one of {VISION_RADII}, got {radius!r}"
            )
        self._vision_radius = radius

    # --- Read accessors ---

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def profile(self) -> DifficultyProfile:
        return self._profile

    @property
    def fog_enabled(self) -> bool:
        return self._fog_enabled

    @property
    def vision_radius(self) -> int:
        return self._vision_radius

    @property
    def state(self) -> ExplorerState:
        return self._state

    @property
    def position(self) -> Hex:
        return self._state.position

    @property
    def world(self) -> WorldMap:
        return self._world

    @property
    def counters(self) -> RatioCounters:
        return self._counters

    @property
    def rivers(self) -> list[River]:
        """All rivers, in creation order."""
        return list(self._rivers)

    @property
    def trail(self) -> list[Hex]:
        """Previous positions, oldest first."""
        return list(self._state.trail)

    def tiles(self) -> list[Tile]:
        """All generated tiles, in creation order."""
        return list(self._world.all_tiles().values())

    def tile_views(self) -> list[TileView]:
        """All generated tiles with their visibility computed now."""
        tiles = self.tiles()
        mask = visibility_mask(
            tiles, self._state.position, self._vision_radius, self._fog_enabled
        )
        return [TileView(tile=t, visible=bool(v)) for t, v in zip(tiles, mask)]

    def visible_tiles(self) -> list[Tile]:
        """Generated tiles the explorer can currently see."""
        return [view.tile for view in self.tile_views() if view.visible]

    def discovered_types(self) -> dict[Category, list[TerrainType]]:
        """Terrain types generated at least once, per category.

        Each list is in palette-group order. Visibility is not considered.
        """
        found = {tile.terrain for tile in self._world.all_tiles().values()}
        return {
            category: sorted(
                (t for t in found if t.category is category),
                key=lambda t: t.palette_group,
            )
            for category in Category
        }
