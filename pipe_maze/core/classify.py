from __future__ import annotations

import logging
from collections import Counter
from typing import AbstractSet, Dict, Optional

from .errors import ClassificationInconsistency
from .network import SCALE, SuperCell, SupersampledNetwork
from .types import Classification, ClassificationMap, Coord

log = logging.getLogger("pipe_maze.classify")


def classify_status(status: SuperCell) -> Classification:
    if status == SuperCell.PIPE_VISITED:
        return Classification.ON_LOOP
    if status == SuperCell.EMPTY_VISITED:
        return Classification.EXTERIOR
    # never reached by either traversal: pipe junk or ground inside the loop
    return Classification.ENCLOSED


def center_counts(network: SupersampledNetwork) -> Dict[Classification, int]:
    """Bucket sizes read straight off the center sub-cells of the status buffer."""
    w = network.width
    centers = bytearray()
    for ty in range(network.grid.height):
        row_start = (ty * SCALE + 1) * w
        centers += network.cells[row_start + 1:row_start + w:SCALE]
    on_loop = centers.count(SuperCell.PIPE_VISITED)
    exterior = centers.count(SuperCell.EMPTY_VISITED)
    return {
        Classification.ON_LOOP: on_loop,
        Classification.EXTERIOR: exterior,
        Classification.ENCLOSED: len(centers) - on_loop - exterior,
    }


def classify(
    network: SupersampledNetwork,
    loop_tiles: Optional[AbstractSet[Coord]] = None,
) -> ClassificationMap:
    """
    Classify each tile by the status of its block's center sub-cell.

    The per-tile map must agree with the bucket sizes counted from the status
    buffer, and those must add up to the tile count. When `loop_tiles` is
    given, the tiles classified as on-loop must be exactly that set.
    """
    grid = network.grid
    result: ClassificationMap = {}
    for coord in grid.coords():
        result[coord] = classify_status(network.status_at(network.center_index(coord)))

    counts = center_counts(network)
    total = sum(counts.values())
    if total != grid.width * grid.height:
        raise ClassificationInconsistency(
            f"Counted {total} tile centers but the grid holds {grid.width * grid.height}."
        )
    mapped = Counter(result.values())
    for kind, n in counts.items():
        if mapped[kind] != n:
            raise ClassificationInconsistency(
                f"{mapped[kind]} tiles classified {kind.name}, network holds {n}."
            )

    if loop_tiles is not None:
        on_loop = {c for c, k in result.items() if k is Classification.ON_LOOP}
        if on_loop != set(loop_tiles):
            raise ClassificationInconsistency(
                f"{len(on_loop)} tiles classified on the loop, tracer found {len(loop_tiles)}."
            )

    log.debug(
        "on-loop=%d exterior=%d enclosed=%d",
        counts[Classification.ON_LOOP],
        counts[Classification.EXTERIOR],
        counts[Classification.ENCLOSED],
    )
    return result
