from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

from .classify import classify
from .config import AnalysisParams
from .exterior import ExteriorFiller
from .grid import TileGrid
from .network import SupersampledNetwork
from .tracer import LoopTracer
from .types import ClassificationMap, LoopReport, TraceResult

log = logging.getLogger("pipe_maze.main")


class Phase(Enum):
    BUILT = "built"
    TRACING = "tracing"
    TRACED = "traced"
    FILLING = "filling"
    FILLED = "filled"
    CLASSIFIED = "classified"


class LoopAnalyzer:
    """
    Drives trace -> fill -> classify over one supersampled network.

    `step()` advances a single traversal generation so a host can animate the
    work; `analyze()` runs everything. The fill only starts once the trace has
    completely finished.
    """

    def __init__(self, grid: TileGrid, params: Optional[AnalysisParams] = None) -> None:
        self.grid = grid
        self.params = params or AnalysisParams()
        self.network = SupersampledNetwork.build(grid, infer_origin=self.params.infer_origin)
        self.phase = Phase.BUILT
        self.tracer: Optional[LoopTracer] = None
        self.filler: Optional[ExteriorFiller] = None
        self.trace_result: Optional[TraceResult] = None
        self.classification: Optional[ClassificationMap] = None
        self._report: Optional[LoopReport] = None

    # ------------------------------------------------------------ transitions

    def start_trace(self) -> LoopTracer:
        if self.phase is not Phase.BUILT:
            raise RuntimeError(f"Cannot start tracing in phase '{self.phase.value}'.")
        self.tracer = LoopTracer(self.network)
        self.phase = Phase.TRACING
        return self.tracer

    def finish_trace(self) -> TraceResult:
        if self.phase is not Phase.TRACING or self.tracer is None:
            raise RuntimeError(f"Cannot finish tracing in phase '{self.phase.value}'.")
        self.trace_result = self.tracer.run()
        self.phase = Phase.TRACED
        return self.trace_result

    def start_fill(self) -> ExteriorFiller:
        if self.phase is not Phase.TRACED:
            raise RuntimeError(f"Cannot start the exterior fill in phase '{self.phase.value}'.")
        self.filler = ExteriorFiller(self.network, seeds=(self.params.exterior_seed,))
        self.phase = Phase.FILLING
        return self.filler

    def finish_fill(self) -> int:
        if self.phase is not Phase.FILLING or self.filler is None:
            raise RuntimeError(f"Cannot finish the exterior fill in phase '{self.phase.value}'.")
        claimed = self.filler.run()
        self.phase = Phase.FILLED
        return claimed

    def finish_classification(self) -> LoopReport:
        if self.phase is not Phase.FILLED or self.trace_result is None:
            raise RuntimeError(f"Cannot classify in phase '{self.phase.value}'.")
        loop_tiles = self.trace_result.loop_tiles if self.params.check_consistency else None
        self.classification = classify(self.network, loop_tiles)
        self.phase = Phase.CLASSIFIED
        self._report = LoopReport(
            width=self.grid.width,
            height=self.grid.height,
            origin=self.grid.origin,
            origin_tile=self.network.origin_tile,
            steps=self.trace_result.steps,
            loop_tiles=self.trace_result.loop_tiles,
            classification=self.classification,
        )
        log.info("steps=%d enclosed=%d", self._report.steps, self._report.enclosed_count)
        return self._report

    # ----------------------------------------------------------- incremental

    @property
    def finished(self) -> bool:
        return self.phase is Phase.CLASSIFIED

    def step(self) -> bool:
        """Advance one generation of whichever phase is active. False once classified."""
        if self.phase is Phase.BUILT:
            self.start_trace()
            return True
        if self.phase is Phase.TRACING:
            assert self.tracer is not None
            if not self.tracer.step():
                self.finish_trace()
            return True
        if self.phase is Phase.TRACED:
            self.start_fill()
            return True
        if self.phase is Phase.FILLING:
            assert self.filler is not None
            if not self.filler.step():
                self.finish_fill()
            return True
        if self.phase is Phase.FILLED:
            self.finish_classification()
        return False

    def analyze(self) -> LoopReport:
        while self.step():
            pass
        assert self._report is not None
        return self._report

    @property
    def report(self) -> Optional[LoopReport]:
        return self._report

    def reset(self) -> None:
        self.network.reset()
        self.phase = Phase.BUILT
        self.tracer = None
        self.filler = None
        self.trace_result = None
        self.classification = None
        self._report = None


def analyze_rows(rows: Sequence[str], params: Optional[AnalysisParams] = None) -> LoopReport:
    return LoopAnalyzer(TileGrid.parse(rows), params).analyze()
