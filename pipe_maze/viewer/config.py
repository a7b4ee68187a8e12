from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from pipe_maze.core.config import AnalysisParams
from pipe_maze.core.network import SuperCell


def _default_status_colors() -> Dict[SuperCell, Tuple[int, int, int]]:
    return {
        SuperCell.BLOCKED: (25, 25, 32),
        SuperCell.PIPE_UNVISITED: (120, 120, 130),
        SuperCell.PIPE_VISITED: (230, 60, 60),
        SuperCell.EMPTY_VISITED: (40, 90, 160),
    }


@dataclass
class RenderParams:
    # pixel size of one supersampled cell
    cell_size: int = 6
    window_title: str = "Pipe Maze - Loop Viewer"
    show_grid: bool = False
    # traversal generations advanced per frame
    steps_per_frame: int = 1
    fps: int = 30
    # Sidebar has a constant pixel width, independent of zoom
    sidebar_width_px: int = 220
    background_color: Tuple[int, int, int] = (15, 15, 20)
    enclosed_color: Tuple[int, int, int] = (80, 200, 90)
    status_colors: Dict[SuperCell, Tuple[int, int, int]] = field(default_factory=_default_status_colors)


@dataclass
class AppConfig:
    analysis: AnalysisParams = field(default_factory=AnalysisParams)
    render: RenderParams = field(default_factory=RenderParams)
