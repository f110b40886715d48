"""
Testy dla A* na siatce hexagonalnej.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexforage.core.hex_coord import HexCoord, ORIGIN
from hexforage.core.hex_grid import HexGrid
from hexforage.core.pathfinding import colored_obstacles, find_path, find_path_next_step


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def grid():
    return HexGrid.create_empty(3)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ŚCIEŻKI
# ═══════════════════════════════════════════════════════════════════════════

def test_straight_path(grid):
    path = find_path(grid, ORIGIN, HexCoord(2, 0))

    assert path == [ORIGIN, HexCoord(1, 0), HexCoord(2, 0)]


def test_path_is_contiguous_and_shortest(grid):
    goal = HexCoord(-2, 3)
    path = find_path(grid, HexCoord(2, -3), goal)

    assert path[0] == HexCoord(2, -3)
    assert path[-1] == goal
    assert len(path) == HexCoord(2, -3).distance(goal) + 1
    assert all(a.distance(b) == 1 for a, b in zip(path, path[1:]))


def test_start_equals_goal(grid):
    assert find_path(grid, ORIGIN, ORIGIN) == [ORIGIN]


def test_off_grid_returns_empty(grid):
    assert find_path(grid, ORIGIN, HexCoord(5, 0)) == []
    assert find_path(grid, HexCoord(5, 0), ORIGIN) == []


def test_blocked_goal_returns_empty(grid):
    assert find_path(grid, ORIGIN, HexCoord(1, 0), {HexCoord(1, 0)}) == []


def test_detour_around_obstacles(grid):
    """Ścieżka omija przeszkody i jest dłuższa niż prosta linia."""
    obstacles = {HexCoord(1, 0), HexCoord(1, -1), HexCoord(0, 1)}
    path = find_path(grid, ORIGIN, HexCoord(2, 0), obstacles)

    assert path[-1] == HexCoord(2, 0)
    assert not obstacles.intersection(path)
    assert len(path) > 3


def test_no_path_when_enclosed(grid):
    """Start otoczony przeszkodami -> brak ścieżki."""
    obstacles = set(ORIGIN.neighbors())
    assert find_path(grid, ORIGIN, HexCoord(3, 0), obstacles) == []
    assert find_path_next_step(grid, ORIGIN, HexCoord(3, 0), obstacles) is None


def test_path_is_deterministic(grid):
    a = find_path(grid, HexCoord(-3, 0), HexCoord(3, 0))
    b = find_path(grid, HexCoord(-3, 0), HexCoord(3, 0))
    assert a == b


def test_next_step(grid):
    assert find_path_next_step(grid, ORIGIN, HexCoord(0, -2)) == HexCoord(0, -1)
    assert find_path_next_step(grid, ORIGIN, ORIGIN) is None


def test_colored_obstacles(grid):
    colored = grid.set_cell(HexCoord(1, 0), 2).set_cell(HexCoord(0, 1), 5)
    assert colored_obstacles(colored) == {HexCoord(1, 0), HexCoord(0, 1)}
