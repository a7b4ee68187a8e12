from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from .network import SuperCell, SupersampledNetwork

log = logging.getLogger("pipe_maze.fill")


class ExteriorFiller:
    """
    8-connected flood over every sub-cell the loop does not occupy.

    Diagonal moves let the fill squeeze between pipes that only meet at a
    corner; the loop itself is a 4-connected chain in which every turn owns its
    corner cell, so the fill can never step across it.
    """

    def __init__(
        self,
        network: SupersampledNetwork,
        seeds: Iterable[Tuple[int, int]] = ((0, 0),),
    ) -> None:
        self.network = network
        self.claimed = 0
        self.generation = 0
        self.done = False
        self._frontier: List[int] = []

        for x, y in seeds:
            if not network.in_bounds(x, y):
                raise ValueError(f"Exterior seed {(x, y)} is outside the {network.width}x{network.height} network.")
            i = network.index(x, y)
            status = network.status_at(i)
            if status == SuperCell.PIPE_VISITED:
                raise ValueError(f"Exterior seed {(x, y)} lies on the loop.")
            if status == SuperCell.EMPTY_VISITED:
                continue
            network.set_status(i, SuperCell.EMPTY_VISITED)
            self._frontier.append(i)
            self.claimed += 1

    @staticmethod
    def _open(status: int) -> bool:
        return status == SuperCell.BLOCKED or status == SuperCell.PIPE_UNVISITED

    def step(self) -> bool:
        if self.done:
            return False

        net = self.network
        nxt: List[int] = []
        for cell in self._frontier:
            for n in net.neighbors8(cell):
                if self._open(net.cells[n]):
                    net.cells[n] = SuperCell.EMPTY_VISITED
                    nxt.append(n)

        self._frontier = nxt
        if not nxt:
            self.done = True
            log.debug("Exterior fill claimed %d sub-cells in %d generation(s)", self.claimed, self.generation)
            return False

        self.generation += 1
        self.claimed += len(nxt)
        return True

    def run(self) -> int:
        while self.step():
            pass
        return self.claimed
