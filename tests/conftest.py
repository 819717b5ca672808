import pytest

from grid import Grid


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_grid():
    """Factory: make_grid(rows, cols, source, target, walls=())."""

    def _make(rows, cols, source, target, walls=()):
        grid = Grid.create(rows, cols, source, target)
        for r, c in walls:
            grid = grid.toggle_obstacle(r, c)
        return grid

    return _make


@pytest.fixture
def detour_grid(make_grid):
    """5x5, source top-left, target top-right, wall stub down column 2."""
    return make_grid(5, 5, (0, 0), (0, 4), walls=[(0, 2), (1, 2)])
