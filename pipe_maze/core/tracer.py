from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .errors import OpenLoop
from .network import SCALE, SuperCell, SupersampledNetwork
from .types import Coord, TraceResult

log = logging.getLogger("pipe_maze.trace")


class LoopTracer:
    """
    Breadth-first walk along the pipe starting at the origin.

    Each open stub of the origin block seeds its own front. The loop is closed
    once two different fronts touch; the sub-cell generation at which the last
    cell was claimed, divided by three, is the distance to the farthest tile.
    """

    def __init__(self, network: SupersampledNetwork) -> None:
        self.network = network
        self.generation = 0
        self.closed = False
        self.done = False
        self.tile_distance: Dict[Coord, int] = {}

        self._front: Dict[int, int] = {}
        self._frontier: List[int] = []
        self._last_claim = 0
        self._result: Optional[TraceResult] = None
        self._seed()

    def _seed(self) -> None:
        net = self.network
        origin = net.grid.origin
        center = net.center_index(origin)
        net.set_status(center, SuperCell.PIPE_VISITED)
        self._front[center] = -1
        self.tile_distance[origin] = 0

        label = 0
        for n in net.neighbors4(center):
            if net.status_at(n) != SuperCell.PIPE_UNVISITED:
                continue
            net.set_status(n, SuperCell.PIPE_VISITED)
            self._front[n] = label
            self._frontier.append(n)
            label += 1

        if self._frontier:
            self.generation = 1
            self._last_claim = 1
        log.debug("Seeded %d front(s) around origin %s", label, origin)

    @property
    def frontier(self) -> List[int]:
        return list(self._frontier)

    def step(self) -> bool:
        """Expand one generation. Returns True while more work remains."""
        if self.done:
            return False

        net = self.network
        nxt: List[int] = []
        for cell in self._frontier:
            label = self._front[cell]
            for n in net.neighbors4(cell):
                status = net.status_at(n)
                if status == SuperCell.PIPE_UNVISITED:
                    net.set_status(n, SuperCell.PIPE_VISITED)
                    self._front[n] = label
                    nxt.append(n)
                elif status == SuperCell.PIPE_VISITED:
                    other = self._front.get(n, label)
                    if other != label and other != -1:
                        self.closed = True

        if nxt:
            self.generation += 1
            self._last_claim = self.generation
            for cell in nxt:
                if net.is_center(cell):
                    self.tile_distance[net.block_of(cell)] = self.generation // SCALE

        self._frontier = nxt
        if not nxt:
            self.done = True
            log.debug("Trace halted after %d generation(s), closed=%s", self.generation, self.closed)
            return False
        return True

    def run(self) -> TraceResult:
        while self.step():
            pass
        return self.result()

    def result(self) -> TraceResult:
        if not self.done:
            raise RuntimeError("Trace has not finished yet.")
        if self._result is not None:
            return self._result
        if not self.closed:
            raise OpenLoop(f"Pipe starting at {self.network.grid.origin} does not close into a loop.")

        loop_tiles = frozenset(self.tile_distance)
        steps = self._last_claim // SCALE
        log.info("Loop of %d tiles, farthest point %d steps away", len(loop_tiles), steps)
        self._result = TraceResult(loop_tiles=loop_tiles, steps=steps)
        return self._result
