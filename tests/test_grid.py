"""
Tests for the grid model: construction, copy-on-write edits, random mazes
and configuration.
"""

import random

import pytest

from grid import Cell, CellState, Grid, GridConfig, InvalidConfiguration, UNREACHED


# =============================================================================
# Construction
# =============================================================================


class TestCreate:

    def test_fresh_cells_are_unreached_and_open(self) -> None:
        grid = Grid.create(4, 6, (0, 0), (3, 5))
        for cell in grid.cells():
            assert cell.distance == UNREACHED
            assert cell.visited is False
            assert cell.predecessor is None
            assert cell.is_obstacle is False
        assert len(list(grid.cells())) == 24

    def test_from_config_uses_reference_defaults(self) -> None:
        grid = Grid.from_config(GridConfig())
        assert (grid.rows, grid.cols) == (20, 50)
        assert grid.source == (10, 15)
        assert grid.target == (10, 35)

    @pytest.mark.parametrize("source, target", [
        ((-1, 0), (2, 2)),
        ((0, 0), (3, 0)),
        ((0, 5), (1, 1)),
        ((0, 0), (0, 3)),
    ])
    def test_out_of_bounds_endpoints_rejected(self, source, target) -> None:
        with pytest.raises(InvalidConfiguration):
            Grid.create(3, 3, source, target)

    def test_coincident_endpoints_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="differ"):
            Grid.create(3, 3, (1, 1), (1, 1))

    @pytest.mark.parametrize("rows, cols", [(0, 5), (5, 0), (-2, 3)])
    def test_non_positive_dimensions_rejected(self, rows, cols) -> None:
        with pytest.raises(InvalidConfiguration):
            Grid.create(rows, cols, (0, 0), (0, 1))

    def test_invalid_configuration_is_a_value_error(self) -> None:
        assert issubclass(InvalidConfiguration, ValueError)


# =============================================================================
# Queries
# =============================================================================


class TestQueries:

    def test_neighbours_order_up_down_left_right(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        coords = [c.coords for c in grid.neighbours(1, 1)]
        assert coords == [(0, 1), (2, 1), (1, 0), (1, 2)]

    def test_neighbours_stay_in_bounds(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        assert [c.coords for c in grid.neighbours(0, 0)] == [(1, 0), (0, 1)]

    def test_cell_out_of_bounds_raises(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        with pytest.raises(InvalidConfiguration):
            grid.cell(3, 0)

    def test_cell_state(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2)).toggle_obstacle(1, 1)
        assert grid.cell_state(0, 0) is CellState.SOURCE
        assert grid.cell_state(2, 2) is CellState.TARGET
        assert grid.cell_state(1, 1) is CellState.OBSTACLE
        assert grid.cell_state(0, 1) is CellState.EMPTY

    def test_to_dict(self) -> None:
        grid = Grid.create(3, 4, (0, 0), (2, 3)).toggle_obstacle(1, 2)
        assert grid.to_dict() == {
            "rows": 3,
            "cols": 4,
            "source": [0, 0],
            "target": [2, 3],
            "obstacles": [[1, 2]],
        }


# =============================================================================
# Copy-on-write obstacle toggling
# =============================================================================


class TestToggleObstacle:

    def test_toggle_returns_new_grid_and_leaves_original(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        walled = grid.toggle_obstacle(1, 1)

        assert walled is not grid
        assert walled.cell(1, 1).is_obstacle is True
        assert grid.cell(1, 1).is_obstacle is False

    def test_toggle_twice_restores(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        assert grid.toggle_obstacle(1, 1).toggle_obstacle(1, 1).obstacles() == []

    def test_untouched_rows_are_shared(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        walled = grid.toggle_obstacle(1, 1)

        assert walled._cells[0] is grid._cells[0]
        assert walled._cells[2] is grid._cells[2]
        assert walled._cells[1] is not grid._cells[1]
        # untouched cell of the touched row is still the same object
        assert walled.cell(1, 0) is grid.cell(1, 0)

    @pytest.mark.parametrize("coords", [(0, 0), (2, 2)])
    def test_toggling_an_endpoint_is_a_no_op(self, coords) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        same = grid.toggle_obstacle(*coords)
        assert same is grid
        assert grid.cell(*coords).is_obstacle is False

    def test_toggle_out_of_bounds_raises(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        with pytest.raises(InvalidConfiguration):
            grid.toggle_obstacle(5, 5)

    def test_toggled_cell_has_clean_search_state(self) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        grid.cell(1, 1).distance = 4
        grid.cell(1, 1).visited = True
        walled = grid.toggle_obstacle(1, 1)
        assert walled.cell(1, 1).distance == UNREACHED
        assert walled.cell(1, 1).visited is False


# =============================================================================
# Random maze
# =============================================================================


class TestRandomize:

    def test_zero_density_clears_walls(self) -> None:
        grid = Grid.create(4, 4, (0, 0), (3, 3)).toggle_obstacle(1, 1)
        assert grid.randomize(0.0, rng=random.Random(1)).obstacles() == []

    def test_full_density_walls_everything_but_endpoints(self) -> None:
        grid = Grid.create(4, 4, (0, 0), (3, 3)).randomize(1.0, rng=random.Random(1))
        assert len(grid.obstacles()) == 14
        assert grid.cell(0, 0).is_obstacle is False
        assert grid.cell(3, 3).is_obstacle is False

    def test_endpoints_never_walled(self) -> None:
        grid = Grid.create(10, 10, (2, 3), (7, 8))
        for seed in range(20):
            maze = grid.randomize(0.5, rng=random.Random(seed))
            assert not maze.cell(2, 3).is_obstacle
            assert not maze.cell(7, 8).is_obstacle

    def test_same_seed_same_maze(self) -> None:
        grid = Grid.create(10, 10, (0, 0), (9, 9))
        a = grid.randomize(0.3, rng=random.Random(42))
        b = grid.randomize(0.3, rng=random.Random(42))
        assert a.obstacles() == b.obstacles()

    def test_randomize_does_not_touch_original(self) -> None:
        grid = Grid.create(5, 5, (0, 0), (4, 4))
        grid.randomize(1.0, rng=random.Random(0))
        assert grid.obstacles() == []

    @pytest.mark.parametrize("density", [-0.1, 1.5])
    def test_bad_density_rejected(self, density) -> None:
        grid = Grid.create(3, 3, (0, 0), (2, 2))
        with pytest.raises(InvalidConfiguration):
            grid.randomize(density)

    def test_reset_keeps_dimensions_and_endpoints(self) -> None:
        grid = Grid.create(4, 7, (1, 1), (2, 5)).toggle_obstacle(0, 0)
        fresh = grid.reset()
        assert (fresh.rows, fresh.cols, fresh.source, fresh.target) == (4, 7, (1, 1), (2, 5))
        assert fresh.obstacles() == []


# =============================================================================
# Cell
# =============================================================================


def test_cell_reset_search_state_keeps_wall() -> None:
    cell = Cell(1, 2, is_obstacle=True)
    cell.distance = 3
    cell.visited = True
    cell.predecessor = (1, 1)
    cell.reset_search_state()
    assert cell.is_obstacle is True
    assert (cell.distance, cell.visited, cell.predecessor) == (UNREACHED, False, None)
    assert not cell.reached


# =============================================================================
# Config
# =============================================================================


class TestGridConfig:

    def test_from_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("PATHVIZ_ROWS", "8")
        monkeypatch.setenv("PATHVIZ_COLS", "12")
        monkeypatch.setenv("PATHVIZ_SOURCE", "1, 2")
        monkeypatch.setenv("PATHVIZ_TARGET", "7,11")
        monkeypatch.setenv("PATHVIZ_WALL_DENSITY", "0.25")
        monkeypatch.setenv("PATHVIZ_SPEED", "fast")

        config = GridConfig.from_env()
        assert config == GridConfig(rows=8, cols=12, source=(1, 2), target=(7, 11),
                                    wall_density=0.25, speed="fast")

    def test_from_env_falls_back_on_garbage(self, monkeypatch) -> None:
        monkeypatch.setenv("PATHVIZ_ROWS", "many")
        monkeypatch.setenv("PATHVIZ_SOURCE", "1;2")
        monkeypatch.setenv("PATHVIZ_WALL_DENSITY", "")
        monkeypatch.delenv("PATHVIZ_COLS", raising=False)
        monkeypatch.delenv("PATHVIZ_TARGET", raising=False)
        monkeypatch.delenv("PATHVIZ_SPEED", raising=False)

        assert GridConfig.from_env() == GridConfig()
