from __future__ import annotations

from .config import AnalysisParams
from .analysis import LoopAnalyzer, Phase, analyze_rows
from .classify import classify
from .errors import (
    AmbiguousOrigin,
    ClassificationInconsistency,
    InvalidTileGlyph,
    MalformedGrid,
    MissingOrigin,
    OpenLoop,
    PipeMazeError,
)
from .exterior import ExteriorFiller
from .grid import TileGrid, infer_origin_tile
from .network import SuperCell, SupersampledNetwork
from .tiles import Direction, Tile, VALID_GLYPHS, tile_for_glyph
from .tracer import LoopTracer
from .types import Classification, Coord, LoopReport, TraceResult
from . import io as io

__all__ = [
    "AnalysisParams",
    "LoopAnalyzer",
    "Phase",
    "analyze_rows",
    "classify",
    "AmbiguousOrigin",
    "ClassificationInconsistency",
    "InvalidTileGlyph",
    "MalformedGrid",
    "MissingOrigin",
    "OpenLoop",
    "PipeMazeError",
    "ExteriorFiller",
    "TileGrid",
    "infer_origin_tile",
    "SuperCell",
    "SupersampledNetwork",
    "Direction",
    "Tile",
    "VALID_GLYPHS",
    "tile_for_glyph",
    "LoopTracer",
    "Classification",
    "Coord",
    "LoopReport",
    "TraceResult",
    "io",
]
