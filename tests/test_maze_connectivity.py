"""Connectivity oracle and carver rollback on hand-built grids."""

from pacmaze.maze import LayoutCarver, MazeGrid, is_fully_connected, reachable_cells


def test_open_grid_is_connected():
    g = MazeGrid()
    assert is_fully_connected(g)
    assert len(reachable_cells(g)) == 121


def test_isolated_corner_is_detected():
    g = MazeGrid()
    g.close_edge((0, 0), (0, 1))
    assert is_fully_connected(g)
    g.close_edge((0, 0), (1, 0))
    assert not is_fully_connected(g)
    reach = reachable_cells(g)
    assert (0, 0) not in reach
    assert len(reach) == 120


def test_oracle_has_no_side_effects():
    g = MazeGrid()
    g.close_edge((5, 5), (5, 6))
    before_h = [row[:] for row in g.horizontal]
    before_v = [row[:] for row in g.vertical]
    is_fully_connected(g)
    assert g.horizontal == before_h and g.vertical == before_v


def test_other_origin():
    g = MazeGrid()
    g.close_edge((0, 0), (0, 1))
    g.close_edge((0, 0), (1, 0))
    assert reachable_cells(g, origin=(0, 0)) == {(0, 0)}
    assert not is_fully_connected(g, origin=(0, 0))


def test_try_remove_edge_rolls_back_disconnecting_wall():
    g = MazeGrid()
    # targets low enough that the floor rule never blocks
    g.apply_plan([[1] * 11 for _ in range(11)])
    carver = LayoutCarver(g)
    # wall off the (0,0)-(0,1) pair except for its link to (0,2)
    assert carver.try_remove_edge((0, 0), (1, 0)) is True
    assert carver.try_remove_edge((0, 1), (1, 1)) is True
    assert carver.try_remove_edge((0, 1), (0, 2)) is False
    assert g.is_open((0, 1), (0, 2))
    assert g.cell((0, 1)).current_count == 2
    assert g.cell((0, 2)).current_count == 3
    assert is_fully_connected(g)
    assert carver.metrics["edges_removed"] == 2
    assert carver.metrics["rollbacks"] == 1
    assert carver.metrics["flood_checks"] == 3


def test_try_remove_edge_respects_floor():
    g = MazeGrid()
    g.apply_plan([[2] * 11 for _ in range(11)])
    carver = LayoutCarver(g)
    # corner (0,0) starts with exactly 2 open edges, its target
    assert carver.try_remove_edge((0, 0), (0, 1)) is False
    assert g.is_open((0, 0), (0, 1))
    assert carver.metrics["floor_skips"] == 1
    assert carver.metrics["flood_checks"] == 0


def test_try_remove_edge_on_existing_wall_is_noop():
    g = MazeGrid()
    g.apply_plan([[1] * 11 for _ in range(11)])
    carver = LayoutCarver(g)
    assert carver.try_remove_edge((4, 4), (4, 5)) is True
    assert carver.try_remove_edge((4, 4), (4, 5)) is False
    assert carver.metrics["edges_removed"] == 1
    assert g.cell((4, 4)).current_count == 3
