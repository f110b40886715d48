"""
Testy dla siatki hexagonalnej (HexGrid).

Testuje:
- Rozmiar dysku i generowanie świata
- Rozróżnienie "poza siatką" vs "puste pole"
- Semantykę wartości set_cell / set_cells
- Zapytania (liczniki kolorów, sąsiedztwo)
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexforage.core.hex_coord import HexCoord, ORIGIN
from hexforage.core.hex_grid import HexGrid, Cell
from hexforage.core.rng import GameRNG


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def empty_grid():
    """Pusta siatka o promieniu 3 (37 pól)."""
    return HexGrid.create_empty(3)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TWORZENIE
# ═══════════════════════════════════════════════════════════════════════════

def test_create_empty_size(empty_grid):
    assert len(empty_grid) == 37
    assert empty_grid.total_colored() == 0
    assert len(empty_grid.get_empty_cells()) == 37


def test_create_empty_negative_radius_raises():
    with pytest.raises(ValueError):
        HexGrid.create_empty(-1)


def test_generate_full_probability_radius_10():
    """Promień 10 i prawdopodobieństwo 1 -> dokładnie 331 kolorowych pól."""
    grid = HexGrid.generate(10, 1.0, 8, GameRNG(1))

    assert grid.total_colored() == 331
    assert all(0 <= cell.color_index < 8 for cell in grid.get_colored_cells())


def test_generate_zero_probability_is_empty():
    grid = HexGrid.generate(5, 0.0, 8, GameRNG(1))

    assert len(grid) == 91
    assert grid.total_colored() == 0


def test_generate_is_deterministic():
    """Ten sam seed -> ten sam świat."""
    a = HexGrid.generate(5, 0.3, 8, GameRNG(777))
    b = HexGrid.generate(5, 0.3, 8, GameRNG(777))
    c = HexGrid.generate(5, 0.3, 8, GameRNG(778))

    assert a == b
    assert a != c


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ODCZYT
# ═══════════════════════════════════════════════════════════════════════════

def test_get_cell_outside_vs_empty(empty_grid):
    """Poza siatką -> None, puste pole -> Cell(color_index=None)."""
    outside = HexCoord(4, 0)
    inside = HexCoord(1, -1)

    assert empty_grid.get_cell(outside) is None
    assert empty_grid.get_cell(inside) == Cell(inside, None)
    assert empty_grid.get_cell(inside).is_empty


def test_is_empty_and_is_colored(empty_grid):
    grid = empty_grid.set_cell(ORIGIN, 5)

    assert grid.is_colored(ORIGIN)
    assert not grid.is_empty(ORIGIN)
    assert grid.is_empty(HexCoord(0, 1))
    # poza siatką: ani puste, ani kolorowe
    assert not grid.is_empty(HexCoord(9, 9))
    assert not grid.is_colored(HexCoord(9, 9))


def test_boundary_is_inclusive(empty_grid):
    assert empty_grid.contains(HexCoord(3, -3))
    assert empty_grid.contains(HexCoord(-3, 0))
    assert not empty_grid.contains(HexCoord(3, 1))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZAPIS
# ═══════════════════════════════════════════════════════════════════════════

def test_set_cell_returns_new_grid(empty_grid):
    """Stara siatka nie jest modyfikowana."""
    updated = empty_grid.set_cell(HexCoord(1, 0), 3)

    assert updated.color_at(HexCoord(1, 0)) == 3
    assert empty_grid.color_at(HexCoord(1, 0)) is None
    assert updated is not empty_grid


def test_set_cell_outside_is_noop(empty_grid):
    assert empty_grid.set_cell(HexCoord(10, 0), 3) is empty_grid


def test_set_cell_same_color_is_noop(empty_grid):
    grid = empty_grid.set_cell(ORIGIN, 2)
    assert grid.set_cell(ORIGIN, 2) is grid


def test_set_cells_batch(empty_grid):
    grid = empty_grid.set_cells([
        (HexCoord(0, -1), 1),
        (HexCoord(1, -1), 2),
        (HexCoord(50, 0), 3),
    ])

    assert grid.total_colored() == 2
    assert grid.count_colors() == {1: 1, 2: 1}


def test_clear_cell(empty_grid):
    grid = empty_grid.set_cell(ORIGIN, 4).set_cell(ORIGIN, None)
    assert grid.is_empty(ORIGIN)
    assert grid == empty_grid


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZAPYTANIA
# ═══════════════════════════════════════════════════════════════════════════

def test_count_colors(empty_grid):
    grid = empty_grid.set_cells([
        (HexCoord(0, -1), 1),
        (HexCoord(0, 1), 1),
        (HexCoord(2, 0), 6),
    ])

    assert grid.count_colors() == {1: 2, 6: 1}
    assert grid.total_colored() == 3
    assert len(grid.get_colored_cells()) == 3


def test_count_adjacent_same_color(empty_grid):
    """Tylko pola z sąsiadem tego samego koloru są liczone."""
    grid = empty_grid.set_cells([
        (ORIGIN, 2),
        (HexCoord(0, -1), 2),
        (HexCoord(3, 0), 2),
        (HexCoord(-2, 0), 5),
    ])

    result = grid.count_adjacent_same_color(8)

    assert len(result) == 8
    assert result[2] == 2
    assert result[5] == 0


def test_debug_print_marks(empty_grid):
    grid = empty_grid.set_cell(HexCoord(1, 0), 7)
    text = grid.debug_print({ORIGIN: "@"})

    assert "@" in text
    assert "7" in text
    assert len(text.splitlines()) == 7
