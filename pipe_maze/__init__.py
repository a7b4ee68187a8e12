from __future__ import annotations
from .core.config import AnalysisParams
from .core.analysis import LoopAnalyzer, Phase, analyze_rows
from .core.errors import PipeMazeError
from .core.grid import TileGrid
from .core.network import SuperCell, SupersampledNetwork
from .core.types import Classification, LoopReport

__all__ = [
    "AnalysisParams",
    "LoopAnalyzer",
    "Phase",
    "analyze_rows",
    "PipeMazeError",
    "TileGrid",
    "SuperCell",
    "SupersampledNetwork",
    "Classification",
    "LoopReport",
]
