from __future__ import annotations

import logging
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from .grid import TileGrid, infer_origin_tile
from .tiles import DIRECTIONS, Tile
from .types import Coord

log = logging.getLogger("pipe_maze.network")

SCALE = 3


class SuperCell(IntEnum):
    BLOCKED = 0
    PIPE_UNVISITED = 1
    PIPE_VISITED = 2
    EMPTY_VISITED = 3


STATUS_GLYPHS: Dict[SuperCell, str] = {
    SuperCell.BLOCKED: " ",
    SuperCell.PIPE_UNVISITED: "+",
    SuperCell.PIPE_VISITED: "#",
    SuperCell.EMPTY_VISITED: ".",
}


def block_offsets(tile: Tile) -> List[Tuple[int, int]]:
    """Sub-cell offsets inside a 3x3 block that carry pipe for this tile."""
    if not tile.is_pipe:
        return []
    out = [(1, 1)]
    if tile.north:
        out.append((1, 0))
    if tile.south:
        out.append((1, 2))
    if tile.east:
        out.append((2, 1))
    if tile.west:
        out.append((0, 1))
    return out


class SupersampledNetwork:
    """
    The tile grid at three times the resolution.

    Every tile becomes a 3x3 block: the center and the edge midpoints of its
    open directions carry pipe, corners never do. Statuses live in one flat
    row-major buffer, so a cell is addressed by `y * width + x`.
    """

    def __init__(self, grid: TileGrid, origin_tile: Tile) -> None:
        self.grid = grid
        self.origin_tile = origin_tile
        self.width = grid.width * SCALE
        self.height = grid.height * SCALE
        self._initial = bytearray(self.width * self.height)

        for tx, ty in grid.coords():
            tile = origin_tile if (tx, ty) == grid.origin else grid.tile_at((tx, ty))
            for ox, oy in block_offsets(tile):
                self._initial[self.index(tx * SCALE + ox, ty * SCALE + oy)] = SuperCell.PIPE_UNVISITED

        self.cells = bytearray(self._initial)

    @classmethod
    def build(cls, grid: TileGrid, infer_origin: bool = True) -> "SupersampledNetwork":
        if infer_origin:
            origin_tile = infer_origin_tile(grid)
        else:
            # legacy behaviour: the start tile is open toward every in-bounds neighbour
            origin_tile = Tile.from_directions(
                *(d for d in DIRECTIONS if grid.neighbor(grid.origin, d) is not None)
            )
        net = cls(grid, origin_tile)
        log.debug("Built %dx%d supersampled network", net.width, net.height)
        return net

    # ------------------------------------------------------------ addressing

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def coord(self, index: int) -> Tuple[int, int]:
        return index % self.width, index // self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def center_index(self, tile: Coord) -> int:
        tx, ty = tile
        return self.index(tx * SCALE + 1, ty * SCALE + 1)

    def block_of(self, index: int) -> Coord:
        x, y = self.coord(index)
        return x // SCALE, y // SCALE

    def is_center(self, index: int) -> bool:
        x, y = self.coord(index)
        return x % SCALE == 1 and y % SCALE == 1

    # -------------------------------------------------------------- statuses

    def status(self, x: int, y: int) -> SuperCell:
        return SuperCell(self.cells[self.index(x, y)])

    def status_at(self, index: int) -> SuperCell:
        return SuperCell(self.cells[index])

    def set_status(self, index: int, status: SuperCell) -> None:
        self.cells[index] = status

    def reset(self) -> None:
        self.cells[:] = self._initial

    def counts(self) -> Dict[SuperCell, int]:
        return {s: self.cells.count(s) for s in SuperCell}

    # ------------------------------------------------------------ neighbours

    def neighbors4(self, index: int) -> List[int]:
        w = self.width
        x = index % w
        out: List[int] = []
        if x > 0:
            out.append(index - 1)
        if x < w - 1:
            out.append(index + 1)
        if index >= w:
            out.append(index - w)
        if index + w < len(self.cells):
            out.append(index + w)
        return out

    def neighbors8(self, index: int) -> List[int]:
        x, y = self.coord(index)
        out: List[int] = []
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny):
                    out.append(ny * self.width + nx)
        return out

    # ----------------------------------------------------------------- debug

    def as_rows(self, statuses: Optional[Dict[SuperCell, str]] = None) -> List[str]:
        glyphs = statuses or STATUS_GLYPHS
        w = self.width
        return [
            "".join(glyphs[SuperCell(v)] for v in self.cells[y * w:(y + 1) * w])
            for y in range(self.height)
        ]
