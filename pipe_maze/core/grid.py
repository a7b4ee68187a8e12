from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import AmbiguousOrigin, InvalidTileGlyph, MalformedGrid, MissingOrigin, OpenLoop
from .tiles import DIRECTIONS, START_GLYPH, Direction, Tile, tile_for_glyph
from .types import Coord

log = logging.getLogger("pipe_maze.grid")


@dataclass(frozen=True)
class TileGrid:
    tiles: Tuple[Tuple[Tile, ...], ...]
    rows: Tuple[str, ...]
    origin: Coord

    @property
    def width(self) -> int:
        return len(self.tiles[0])

    @property
    def height(self) -> int:
        return len(self.tiles)

    @classmethod
    def parse(cls, rows: Sequence[str]) -> "TileGrid":
        """
        Build a grid from text rows.
        Trailing line endings are ignored; everything else must be a known glyph.
        """
        cleaned = [row.rstrip("\r\n") for row in rows]
        if not cleaned:
            raise MalformedGrid("Grid has no rows.")

        width = len(cleaned[0])
        if width == 0:
            raise MalformedGrid("Grid rows must not be empty.")
        for y, row in enumerate(cleaned):
            if len(row) != width:
                raise MalformedGrid(f"Row {y} has length {len(row)}, expected {width}.")

        tiles: List[Tuple[Tile, ...]] = []
        starts: List[Coord] = []
        for y, row in enumerate(cleaned):
            parsed: List[Tile] = []
            for x, glyph in enumerate(row):
                try:
                    parsed.append(tile_for_glyph(glyph))
                except InvalidTileGlyph:
                    raise InvalidTileGlyph(glyph, (x, y)) from None
                if glyph == START_GLYPH:
                    starts.append((x, y))
            tiles.append(tuple(parsed))

        if not starts:
            raise MissingOrigin()
        if len(starts) > 1:
            raise AmbiguousOrigin(starts)

        log.debug("Parsed %dx%d grid, origin at %s", width, len(cleaned), starts[0])
        return cls(tiles=tuple(tiles), rows=tuple(cleaned), origin=starts[0])

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, coord: Coord) -> Tile:
        x, y = coord
        return self.tiles[y][x]

    def neighbor(self, coord: Coord, direction: Direction) -> Optional[Coord]:
        n = (coord[0] + direction.dx, coord[1] + direction.dy)
        return n if self.in_bounds(n) else None

    def coords(self) -> Iterator[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)


def _connects_back(grid: TileGrid, coord: Coord, direction: Direction) -> bool:
    n = grid.neighbor(coord, direction)
    return n is not None and grid.tile_at(n).opens(direction.opposite)


def _walk_from_origin(grid: TileGrid, first: Direction) -> Optional[Direction]:
    """
    Follow the pipe leaving the origin through `first`.
    Returns the direction through which the walk re-enters the origin, or None
    when it dead-ends or runs off the grid.
    """
    origin = grid.origin
    coord = grid.neighbor(origin, first)
    came_from = first.opposite
    # a simple cycle cannot be longer than the tile count
    for _ in range(grid.width * grid.height):
        if coord is None:
            return None
        if coord == origin:
            return came_from
        tile = grid.tile_at(coord)
        if not tile.opens(came_from):
            return None
        exits = [d for d in tile.open_directions() if d != came_from]
        if len(exits) != 1:
            return None
        out = exits[0]
        nxt = grid.neighbor(coord, out)
        if nxt is None:
            return None
        coord, came_from = nxt, out.opposite
    return None


def infer_origin_tile(grid: TileGrid) -> Tile:
    """
    Work out which two directions the origin really connects.

    A direction is a candidate when the neighbouring tile opens back toward the
    origin. Candidates are walked one by one; the first walk that comes back into
    the origin through another candidate fixes the shape.
    """
    origin = grid.origin
    candidates = [d for d in DIRECTIONS if _connects_back(grid, origin, d)]
    if len(candidates) < 2:
        raise OpenLoop(f"Origin {origin} connects to {len(candidates)} neighbour(s); a loop needs two.")

    for first in candidates:
        back = _walk_from_origin(grid, first)
        if back is not None and back != first and back in candidates:
            shape = Tile.from_directions(first, back)
            log.debug("Origin %s connects %s and %s", origin, first.name, back.name)
            return shape

    raise OpenLoop(f"No closed loop passes through origin {origin}.")
