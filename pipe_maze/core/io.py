from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from .grid import TileGrid
from .tiles import START_GLYPH, Tile, glyph_for_tile
from .types import LoopReport

log = logging.getLogger("pipe_maze.io")

PathLike = Union[str, Path]


def read_rows(path: PathLike) -> List[str]:
    """
    Read grid rows from a text file.
    Trailing blank lines are dropped; blank lines inside the grid are kept so
    the parser can reject them.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Grid file not found at {path}.")

    with open(path, "r", encoding="utf-8") as f:
        rows = [line.rstrip("\r\n") for line in f]

    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def load_grid(path: PathLike) -> TileGrid:
    grid = TileGrid.parse(read_rows(path))
    log.info("Loaded %dx%d grid from %s", grid.width, grid.height, path)
    return grid


def origin_glyph(tile: Tile) -> str:
    # a legacy origin on a grid edge opens three ways and has no glyph of its own
    try:
        return glyph_for_tile(tile)
    except KeyError:
        return START_GLYPH


def report_payload(report: LoopReport) -> Dict[str, Any]:
    return {
        "width": report.width,
        "height": report.height,
        "origin": list(report.origin),
        "origin_glyph": origin_glyph(report.origin_tile),
        "steps": report.steps,
        "loop_length": report.loop_length,
        "enclosed": report.enclosed_count,
        "exterior": report.exterior_count,
        "classification": report.classification_rows(),
    }


def save_report(path: PathLike, report: LoopReport) -> Path:
    """
    Save a report as JSON.
    Always saves as <name>.json (extension added if not present).
    """
    path = Path(path)
    if path.suffix != ".json":
        path = path.with_suffix(".json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(report_payload(report), f, indent=4)

    log.info("Saved report to %s", path)
    return path


def load_report(path: PathLike) -> Dict[str, Any]:
    path = Path(path)
    if path.suffix == "":
        path = path.with_suffix(".json")

    if not path.exists():
        raise FileNotFoundError(f"Report not found at {path}.")

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
