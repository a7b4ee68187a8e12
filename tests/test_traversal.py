import importlib

import pytest

from pipe_maze.core.classify import center_counts, classify, classify_status
from pipe_maze.core.errors import ClassificationInconsistency, OpenLoop
from pipe_maze.core.exterior import ExteriorFiller
from pipe_maze.core.grid import TileGrid
from pipe_maze.core.network import SuperCell, SupersampledNetwork
from pipe_maze.core.tracer import LoopTracer
from pipe_maze.core.types import Classification

from pipe_grids import DEAD_END, EXTRA_NEIGHBOUR

classify_module = importlib.import_module("pipe_maze.core.classify")


def test_tracer_seeds_two_fronts(square_grid):
    net = SupersampledNetwork.build(square_grid)
    tracer = LoopTracer(net)
    assert net.status(4, 4) is SuperCell.PIPE_VISITED
    assert sorted(net.coord(i) for i in tracer.frontier) == [(4, 5), (5, 4)]


def test_tracer_step_contract(square_grid):
    net = SupersampledNetwork.build(square_grid)
    tracer = LoopTracer(net)
    steps = 0
    while tracer.step():
        steps += 1
    assert tracer.done
    assert tracer.closed
    assert not tracer.step()
    result = tracer.run()
    assert result.steps == 4
    assert len(result.loop_tiles) == 8


def test_tracer_records_tile_distances(square_grid):
    net = SupersampledNetwork.build(square_grid)
    tracer = LoopTracer(net)
    tracer.run()
    assert tracer.tile_distance[(1, 1)] == 0
    assert tracer.tile_distance[(2, 1)] == 1
    assert tracer.tile_distance[(1, 2)] == 1
    assert tracer.tile_distance[(3, 3)] == 4
    assert max(tracer.tile_distance.values()) == 4


def test_result_before_done_is_an_error(square_grid):
    tracer = LoopTracer(SupersampledNetwork.build(square_grid))
    with pytest.raises(RuntimeError):
        tracer.result()


def test_legacy_origin_follows_extra_neighbour():
    grid = TileGrid.parse(EXTRA_NEIGHBOUR)
    result = LoopTracer(SupersampledNetwork.build(grid, infer_origin=False)).run()
    assert (0, 1) in result.loop_tiles
    assert result.steps == 4

    inferred = LoopTracer(SupersampledNetwork.build(grid)).run()
    assert (0, 1) not in inferred.loop_tiles
    assert len(inferred.loop_tiles) == 8


def test_legacy_origin_on_open_pipe_raises():
    net = SupersampledNetwork.build(TileGrid.parse(DEAD_END), infer_origin=False)
    with pytest.raises(OpenLoop):
        LoopTracer(net).run()


def test_fill_leaves_inside_untouched(square_grid):
    net = SupersampledNetwork.build(square_grid)
    LoopTracer(net).run()
    claimed = ExteriorFiller(net).run()
    assert net.status(7, 7) is SuperCell.BLOCKED
    assert net.status(0, 0) is SuperCell.EMPTY_VISITED
    assert net.status(14, 14) is SuperCell.EMPTY_VISITED
    assert claimed == net.counts()[SuperCell.EMPTY_VISITED]


def test_fill_rejects_seed_on_loop(square_grid):
    net = SupersampledNetwork.build(square_grid)
    LoopTracer(net).run()
    with pytest.raises(ValueError):
        ExteriorFiller(net, seeds=[(4, 4)])
    with pytest.raises(ValueError):
        ExteriorFiller(net, seeds=[(99, 0)])


def test_fill_claims_unvisited_junk_pipe():
    grid = TileGrid.parse(EXTRA_NEIGHBOUR)
    net = SupersampledNetwork.build(grid)
    LoopTracer(net).run()
    ExteriorFiller(net).run()
    # the '-' at (0, 1) is outside the loop
    assert net.status_at(net.center_index((0, 1))) is SuperCell.EMPTY_VISITED


def test_classify_status_mapping():
    assert classify_status(SuperCell.PIPE_VISITED) is Classification.ON_LOOP
    assert classify_status(SuperCell.EMPTY_VISITED) is Classification.EXTERIOR
    assert classify_status(SuperCell.PIPE_UNVISITED) is Classification.ENCLOSED
    assert classify_status(SuperCell.BLOCKED) is Classification.ENCLOSED


def test_classify_detects_loop_mismatch(square_grid):
    net = SupersampledNetwork.build(square_grid)
    result = LoopTracer(net).run()
    ExteriorFiller(net).run()
    wrong = set(result.loop_tiles) - {(1, 1)}
    with pytest.raises(ClassificationInconsistency):
        classify(net, wrong)
    assert len(classify(net, result.loop_tiles)) == 25


def test_center_counts_match_statuses(square_grid):
    net = SupersampledNetwork.build(square_grid)
    LoopTracer(net).run()
    ExteriorFiller(net).run()
    assert center_counts(net) == {
        Classification.ON_LOOP: 8,
        Classification.EXTERIOR: 16,
        Classification.ENCLOSED: 1,
    }


def test_classify_detects_mapping_that_disagrees_with_network(square_grid, monkeypatch):
    net = SupersampledNetwork.build(square_grid)
    LoopTracer(net).run()
    ExteriorFiller(net).run()
    monkeypatch.setattr(classify_module, "classify_status", lambda status: Classification.EXTERIOR)
    with pytest.raises(ClassificationInconsistency):
        classify(net)
