import pytest

from pipe_maze.core.analysis import LoopAnalyzer, Phase, analyze_rows
from pipe_maze.core.config import AnalysisParams
from pipe_maze.core.errors import OpenLoop
from pipe_maze.core.grid import TileGrid
from pipe_maze.core.tiles import Direction
from pipe_maze.core.types import Classification

from pipe_grids import (
    BORDER,
    DEAD_END,
    EXTRA_NEIGHBOUR,
    JUNK,
    SCATTERED,
    SQUARE,
    SQUEEZE,
    TANGLED,
    TWO_ROOMS,
)


@pytest.mark.parametrize(
    "rows,steps,enclosed",
    [
        (SQUARE, 4, 1),
        (TANGLED, 8, 1),
        (TWO_ROOMS, 23, 4),
        (SQUEEZE, 22, 4),
        (BORDER, 4, 1),
    ],
)
def test_steps_and_enclosed(rows, steps, enclosed):
    report = analyze_rows(rows)
    assert report.steps == steps
    assert report.enclosed_count == enclosed


@pytest.mark.parametrize("rows,enclosed", [(SCATTERED, 8), (JUNK, 10)])
def test_enclosed_with_stray_pipes(rows, enclosed):
    report = analyze_rows(rows)
    assert report.enclosed_count == enclosed
    assert report.steps * 2 == report.loop_length


def test_classification_partitions_tiles():
    report = analyze_rows(TWO_ROOMS)
    assert len(report.classification) == 9 * 11
    assert report.loop_length == 46
    assert report.exterior_count == 99 - 46 - 4
    assert set(report.tiles_with(Classification.ENCLOSED)) == {(2, 6), (3, 6), (7, 6), (8, 6)}


@pytest.mark.parametrize("rows", [SQUARE, TANGLED, TWO_ROOMS, SCATTERED, JUNK])
def test_loop_tiles_have_degree_two(rows):
    grid = TileGrid.parse(rows)
    analyzer = LoopAnalyzer(grid)
    report = analyzer.analyze()
    loop = report.loop_tiles
    assert grid.origin in loop

    def shape(coord):
        return report.origin_tile if coord == grid.origin else grid.tile_at(coord)

    for coord in loop:
        linked = 0
        for d in Direction:
            n = grid.neighbor(coord, d)
            if n in loop and shape(coord).opens(d) and shape(n).opens(d.opposite):
                linked += 1
        assert linked == 2, coord


def test_loop_tiles_form_a_single_cycle():
    grid = TileGrid.parse(TANGLED)
    report = LoopAnalyzer(grid).analyze()

    def shape(coord):
        return report.origin_tile if coord == grid.origin else grid.tile_at(coord)

    # walk the cycle from the origin and expect to visit every loop tile once
    seen = [grid.origin]
    prev, cur = None, grid.origin
    while True:
        nxt = [
            grid.neighbor(cur, d)
            for d in shape(cur).open_directions()
            if grid.neighbor(cur, d) != prev
        ][0]
        if nxt == grid.origin:
            break
        seen.append(nxt)
        prev, cur = cur, nxt
    assert len(seen) == len(set(seen)) == report.loop_length


def test_border_loop_has_no_exterior_tiles():
    report = analyze_rows(BORDER)
    assert report.exterior_count == 0
    assert report.classification_rows() == ["LLL", "LIL", "LLL"]


def test_idempotent_on_same_grid():
    grid = TileGrid.parse(SCATTERED)
    first = LoopAnalyzer(grid).analyze()
    second = LoopAnalyzer(grid).analyze()
    assert first.classification == second.classification
    assert first.steps == second.steps


def test_reset_and_rerun():
    analyzer = LoopAnalyzer(TileGrid.parse(TWO_ROOMS))
    first = analyzer.analyze()
    analyzer.reset()
    assert analyzer.phase is Phase.BUILT
    assert analyzer.report is None
    second = analyzer.analyze()
    assert first.classification == second.classification


def test_step_walks_through_every_phase():
    analyzer = LoopAnalyzer(TileGrid.parse(SQUARE))
    seen = [analyzer.phase]
    while analyzer.step():
        if analyzer.phase is not seen[-1]:
            seen.append(analyzer.phase)
    seen.append(analyzer.phase)
    assert seen[0] is Phase.BUILT
    assert seen[-1] is Phase.CLASSIFIED
    for phase in (Phase.TRACING, Phase.TRACED, Phase.FILLING, Phase.FILLED):
        assert phase in seen
    assert not analyzer.step()
    assert analyzer.finished


def test_out_of_order_transitions():
    analyzer = LoopAnalyzer(TileGrid.parse(SQUARE))
    with pytest.raises(RuntimeError):
        analyzer.start_fill()
    with pytest.raises(RuntimeError):
        analyzer.finish_classification()
    analyzer.start_trace()
    with pytest.raises(RuntimeError):
        analyzer.start_trace()
    with pytest.raises(RuntimeError):
        analyzer.start_fill()
    analyzer.finish_trace()
    analyzer.start_fill()
    analyzer.finish_fill()
    report = analyzer.finish_classification()
    assert report.steps == 4


def test_open_loop_raises():
    with pytest.raises(OpenLoop):
        analyze_rows(DEAD_END)
    with pytest.raises(OpenLoop):
        analyze_rows(DEAD_END, AnalysisParams(infer_origin=False))


def test_inferred_origin_excludes_extra_neighbour():
    report = analyze_rows(EXTRA_NEIGHBOUR)
    assert report.classification[(0, 1)] is Classification.EXTERIOR
    assert report.enclosed_count == 1

    legacy = analyze_rows(EXTRA_NEIGHBOUR, AnalysisParams(infer_origin=False))
    assert legacy.classification[(0, 1)] is Classification.ON_LOOP


def test_custom_exterior_seed():
    report = analyze_rows(SQUARE, AnalysisParams(exterior_seed=(14, 14)))
    assert report.enclosed_count == 1


@pytest.mark.parametrize("infer_origin", [True, False])
def test_origin_in_grid_corner(infer_origin):
    report = analyze_rows(["S7.", "LJ.", "..."], AnalysisParams(infer_origin=infer_origin))
    assert report.enclosed_count == 0
    assert report.exterior_count == 5
    assert report.steps == 2
