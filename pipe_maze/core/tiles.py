from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .errors import InvalidTileGlyph


class Direction(Enum):
    N = (0, -1)
    S = (0, 1)
    E = (1, 0)
    W = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE: Dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

DIRECTIONS: Tuple[Direction, ...] = (Direction.N, Direction.S, Direction.E, Direction.W)


@dataclass(frozen=True)
class Tile:
    north: bool = False
    south: bool = False
    east: bool = False
    west: bool = False

    @classmethod
    def from_directions(cls, *directions: Direction) -> "Tile":
        return cls(
            north=Direction.N in directions,
            south=Direction.S in directions,
            east=Direction.E in directions,
            west=Direction.W in directions,
        )

    @property
    def is_pipe(self) -> bool:
        return self.north or self.south or self.east or self.west

    def opens(self, direction: Direction) -> bool:
        if direction is Direction.N:
            return self.north
        if direction is Direction.S:
            return self.south
        if direction is Direction.E:
            return self.east
        return self.west

    def open_directions(self) -> List[Direction]:
        return [d for d in DIRECTIONS if self.opens(d)]


START_GLYPH = "S"
GROUND_GLYPH = "."

TILE_TABLE: Dict[str, Tile] = {
    "S": Tile(north=True, south=True, east=True, west=True),
    "|": Tile(north=True, south=True),
    "-": Tile(east=True, west=True),
    "L": Tile(north=True, east=True),
    "J": Tile(north=True, west=True),
    "7": Tile(south=True, west=True),
    "F": Tile(south=True, east=True),
    ".": Tile(),
}

GLYPH_LABELS: Dict[str, str] = {
    "S": "Start",
    "|": "Vertical",
    "-": "Horizontal",
    "L": "North-East bend",
    "J": "North-West bend",
    "7": "South-West bend",
    "F": "South-East bend",
    ".": "Ground",
}

VALID_GLYPHS = list(TILE_TABLE.keys())


def tile_for_glyph(glyph: str) -> Tile:
    tile = TILE_TABLE.get(glyph)
    if tile is None:
        raise InvalidTileGlyph(glyph)
    return tile


def glyph_for_tile(tile: Tile) -> str:
    """Reverse lookup; the fully open shape maps back to the start glyph."""
    for glyph, candidate in TILE_TABLE.items():
        if candidate == tile:
            return glyph
    raise KeyError(f"No glyph for tile {tile}.")
