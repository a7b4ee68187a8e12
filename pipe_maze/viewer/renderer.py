from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import pygame

from pipe_maze.core.analysis import LoopAnalyzer, Phase
from pipe_maze.core.network import SCALE, SuperCell
from pipe_maze.core.types import Classification
from .config import RenderParams

log = logging.getLogger("pipe_maze.render")

FRONTIER_COLOR: Tuple[int, int, int] = (255, 220, 80)

PHASE_LABELS: Dict[Phase, str] = {
    Phase.BUILT: "Ready",
    Phase.TRACING: "Tracing loop",
    Phase.TRACED: "Loop traced",
    Phase.FILLING: "Filling exterior",
    Phase.FILLED: "Exterior filled",
    Phase.CLASSIFIED: "Done",
}


class PygameRenderer:
    """
    Handles drawing:
    - Supersampled network view (camera + zoom), one square per sub-cell
    - Active frontier highlighted while a traversal runs
    - Enclosed tiles tinted once classification is done
    """

    def __init__(self, params: RenderParams) -> None:
        self.params = params
        self.analyzer: Optional[LoopAnalyzer] = None

        self.camera_x: float = 0.0
        self.camera_y: float = 0.0

    # ------------------------------------------------------------------ API

    def set_analyzer(self, analyzer: LoopAnalyzer) -> None:
        self.analyzer = analyzer
        self.camera_x = 0.0
        self.camera_y = 0.0
        log.debug(
            "Viewing %dx%d network", analyzer.network.width, analyzer.network.height
        )

    # ------------------------------------------------------------- Camera

    def move_camera(self, dx: float, dy: float, view_size: Tuple[int, int]) -> None:
        self.camera_x += dx
        self.camera_y += dy
        self._clamp_camera(view_size)

    def change_zoom(self, delta: int, view_size: Tuple[int, int]) -> None:
        if self.analyzer is None:
            return

        old_cs = self.params.cell_size
        new_cs = max(1, min(32, old_cs + delta))
        if new_cs == old_cs:
            return

        view_w, view_h = view_size
        center_cell_x = (self.camera_x + view_w / 2) / old_cs
        center_cell_y = (self.camera_y + view_h / 2) / old_cs

        self.params.cell_size = new_cs
        self.camera_x = center_cell_x * new_cs - view_w / 2
        self.camera_y = center_cell_y * new_cs - view_h / 2

        self._clamp_camera(view_size)

    # ---------------------------------------------------------------- Draw

    def cell_colors(self) -> List[Tuple[int, int, int]]:
        """Color of every sub-cell in row-major order."""
        assert self.analyzer is not None
        analyzer = self.analyzer
        net = analyzer.network
        palette = self.params.status_colors
        colors = [palette[SuperCell(v)] for v in net.cells]

        if analyzer.classification is not None:
            for (tx, ty), kind in analyzer.classification.items():
                if kind is not Classification.ENCLOSED:
                    continue
                for oy in range(SCALE):
                    row = (ty * SCALE + oy) * net.width + tx * SCALE
                    for ox in range(SCALE):
                        colors[row + ox] = self.params.enclosed_color

        frontier: List[int] = []
        if analyzer.phase is Phase.TRACING and analyzer.tracer is not None:
            frontier = analyzer.tracer.frontier
        for i in frontier:
            colors[i] = FRONTIER_COLOR
        return colors

    def draw(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()
        map_view_rect = pygame.Rect(0, 0, width - self.params.sidebar_width_px, height)

        surface.fill(self.params.background_color)
        if self.analyzer is not None:
            self.draw_network(surface, map_view_rect)

    def draw_network(self, surface: pygame.Surface, view_rect: pygame.Rect) -> None:
        assert self.analyzer is not None
        net = self.analyzer.network
        cs = self.params.cell_size

        buf = b"".join(bytes(c) for c in self.cell_colors())
        image = pygame.image.frombuffer(buf, (net.width, net.height), "RGB")
        if cs != 1:
            image = pygame.transform.scale(image, (net.width * cs, net.height * cs))

        prev_clip = surface.get_clip()
        surface.set_clip(view_rect)
        origin_x = view_rect.x - int(self.camera_x)
        origin_y = view_rect.y - int(self.camera_y)
        surface.blit(image, (origin_x, origin_y))

        if self.params.show_grid:
            block = cs * SCALE
            for tx in range(net.grid.width + 1):
                x = origin_x + tx * block
                pygame.draw.line(surface, (50, 50, 60), (x, origin_y), (x, origin_y + net.height * cs))
            for ty in range(net.grid.height + 1):
                y = origin_y + ty * block
                pygame.draw.line(surface, (50, 50, 60), (origin_x, y), (origin_x + net.width * cs, y))

        surface.set_clip(prev_clip)

    def status_lines(self) -> List[str]:
        if self.analyzer is None:
            return ["No grid loaded"]

        analyzer = self.analyzer
        lines = [
            f"Grid: {analyzer.grid.width}x{analyzer.grid.height}",
            f"Phase: {PHASE_LABELS[analyzer.phase]}",
        ]
        if analyzer.tracer is not None:
            lines.append(f"Trace gen: {analyzer.tracer.generation}")
        if analyzer.filler is not None:
            lines.append(f"Fill gen: {analyzer.filler.generation}")
        report = analyzer.report
        if report is not None:
            lines.append(f"Steps: {report.steps}")
            lines.append(f"Enclosed: {report.enclosed_count}")
        return lines

    # -------------------------------------------------------------- internals

    def _clamp_camera(self, view_size: Tuple[int, int]) -> None:
        if self.analyzer is None:
            self.camera_x = 0
            self.camera_y = 0
            return

        view_w, view_h = view_size
        cs = self.params.cell_size
        map_w_px = self.analyzer.network.width * cs
        map_h_px = self.analyzer.network.height * cs

        max_x = max(0, map_w_px - max(1, view_w))
        max_y = max(0, map_h_px - max(1, view_h))

        self.camera_x = max(0, min(self.camera_x, max_x))
        self.camera_y = max(0, min(self.camera_y, max_y))
