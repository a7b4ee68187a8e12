from __future__ import annotations

from typing import Sequence, Tuple


class PipeMazeError(Exception):
    """Base class for every failure raised by the loop analysis engine."""


class InvalidTileGlyph(PipeMazeError, ValueError):
    def __init__(self, glyph: str, position: Tuple[int, int] | None = None) -> None:
        self.glyph = glyph
        self.position = position
        where = f" at {position}" if position is not None else ""
        super().__init__(f"Invalid tile glyph {glyph!r}{where}.")


class MalformedGrid(PipeMazeError, ValueError):
    pass


class MissingOrigin(PipeMazeError, ValueError):
    def __init__(self) -> None:
        super().__init__("Grid has no origin tile 'S'.")


class AmbiguousOrigin(PipeMazeError, ValueError):
    def __init__(self, positions: Sequence[Tuple[int, int]]) -> None:
        self.positions = list(positions)
        super().__init__(f"Grid has {len(self.positions)} origin tiles at {self.positions}; expected one.")


class OpenLoop(PipeMazeError):
    pass


class ClassificationInconsistency(PipeMazeError, RuntimeError):
    pass
