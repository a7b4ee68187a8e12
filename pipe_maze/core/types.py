from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple

from .tiles import Tile

Coord = Tuple[int, int]


class Classification(Enum):
    ON_LOOP = "L"
    EXTERIOR = "O"
    ENCLOSED = "I"


ClassificationMap = Dict[Coord, Classification]


@dataclass(frozen=True)
class TraceResult:
    loop_tiles: FrozenSet[Coord]
    steps: int


@dataclass(frozen=True)
class LoopReport:
    width: int
    height: int
    origin: Coord
    origin_tile: Tile
    steps: int
    loop_tiles: FrozenSet[Coord]
    classification: ClassificationMap = field(repr=False)

    @property
    def loop_length(self) -> int:
        return len(self.loop_tiles)

    @property
    def enclosed_count(self) -> int:
        return sum(1 for c in self.classification.values() if c is Classification.ENCLOSED)

    @property
    def exterior_count(self) -> int:
        return sum(1 for c in self.classification.values() if c is Classification.EXTERIOR)

    def tiles_with(self, kind: Classification) -> List[Coord]:
        return sorted(
            (coord for coord, c in self.classification.items() if c is kind),
            key=lambda xy: (xy[1], xy[0]),
        )

    def classification_rows(self) -> List[str]:
        """One string per grid row, using 'L' (loop), 'O' (outside) and 'I' (inside)."""
        return [
            "".join(self.classification[(x, y)].value for x in range(self.width))
            for y in range(self.height)
        ]
