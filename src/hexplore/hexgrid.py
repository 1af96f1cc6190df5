"""Axial hex coordinates and grid arithmetic."""

from enum import IntEnum
from typing import Iterator

from pydantic import BaseModel

from .exceptions import InvalidDirectionError


class Direction(IntEnum):
    """6-direction movement enum for a pointy-top hex grid."""

    EAST = 1
    NORTHEAST = 2
    NORTHWEST = 3
    WEST = 4
    SOUTHWEST = 5
    SOUTHEAST = 6

    @classmethod
    def parse(cls, name: str) -> "Direction":
        """Parse a direction from its name or abbreviation ("east", "NE", ...).

        Raises:
            InvalidDirectionError: If the name matches no direction.
        """
        key = name.strip().upper().replace("-", "").replace("_", "")
        key = _DIRECTION_ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise InvalidDirectionError(f"Unknown direction: {name!r}") from None


_DIRECTION_ALIASES: dict[str, str] = {
    "E": "EAST",
    "NE": "NORTHEAST",
    "NW": "NORTHWEST",
    "W": "WEST",
    "SW": "SOUTHWEST",
    "SE": "SOUTHEAST",
}


# Axial deltas (dq, dr). Order matches ring traversal.
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.EAST: (1, 0),
    Direction.NORTHEAST: (1, -1),
    Direction.NORTHWEST: (0, -1),
    Direction.WEST: (-1, 0),
    Direction.SOUTHWEST: (-1, 1),
    Direction.SOUTHEAST: (0, 1),
}


class Hex(BaseModel, frozen=True):
    """Immutable axial hex coordinate."""

    q: int
    r: int

    @property
    def s(self) -> int:
        """Third cube component, always -q-r."""
        return -self.q - self.r

    def __add__(self, other: "Hex") -> "Hex":
        return Hex(q=self.q + other.q, r=self.r + other.r)

    def offset(self, direction: Direction, steps: int = 1) -> "Hex":
        """Return new coordinate moved `steps` hexes along direction."""
        dq, dr = DIRECTION_DELTAS[direction]
        return Hex(q=self.q + dq * steps, r=self.r + dr * steps)

    def __hash__(self) -> int:
        return hash((self.q, self.r))

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"

    def __repr__(self) -> str:
        return f"Hex(q={self.q}, r={self.r})"


ORIGIN = Hex(q=0, r=0)


def distance(a: Hex, b: Hex) -> int:
    """Hex distance between two coordinates (cube metric)."""
    dx = a.q - b.q
    dz = a.r - b.r
    dy = -dx - dz
    return max(abs(dx), abs(dy), abs(dz))


def neighbors(center: Hex) -> list[Hex]:
    """The 6 coordinates adjacent to center, in direction order."""
    return [
        Hex(q=center.q + dq, r=center.r + dr)
        for dq, dr in DIRECTION_DELTAS.values()
    ]


def ring(center: Hex, radius: int) -> Iterator[Hex]:
    """Yield the 6*radius coordinates at exactly `radius` from center.

    Starts at center + SOUTHWEST*radius and walks each direction in enum
    order for `radius` steps. Radius 0 yields only the center.

    Raises:
        ValueError: If radius is negative.
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    if radius == 0:
        yield center
        return

    current = center.offset(Direction.SOUTHWEST, radius)
    for direction in Direction:
        for _ in range(radius):
            yield current
            current = current.offset(direction)


def disk_around(center: Hex, radius: int) -> Iterator[Hex]:
    """Yield every coordinate within `radius` of center, ordered by q then r.

    Raises:
        ValueError: If radius is negative.
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    for dq in range(-radius, radius + 1):
        for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1):
            yield Hex(q=center.q + dq, r=center.r + dr)
