"""
Testy dla współrzędnych hexagonalnych.

Testuje:
- Kierunki sąsiadów i ich kolejność
- Dystans (symetria, nierówność trójkąta)
- Klucze tekstowe "q,r"
- Rotację i dysk coords_in_radius
- Dodawanie, odejmowanie, wektory kierunków
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexforage.core.hex_coord import (
    HexCoord,
    HEX_DIRECTIONS,
    ORIGIN,
    add,
    subtract,
    direction_vector,
    coords_in_radius,
)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KIERUNKI I SĄSIEDZI
# ═══════════════════════════════════════════════════════════════════════════

def test_directions_order():
    """Kolejność kierunków: up, up-right, down-right, down, down-left, up-left."""
    assert HEX_DIRECTIONS == [(0, -1), (1, -1), (1, 0), (0, 1), (-1, 1), (-1, 0)]


def test_opposite_directions_cancel():
    """Kierunek i oraz (i + 3) % 6 sumują się do zera."""
    for i in range(6):
        dq, dr = HEX_DIRECTIONS[i]
        oq, or_ = HEX_DIRECTIONS[(i + 3) % 6]
        assert (dq + oq, dr + or_) == (0, 0)


def test_neighbors_are_at_distance_one():
    """Wszyscy sąsiedzi są w odległości 1."""
    center = HexCoord(2, -3)
    neighbors = center.neighbors()

    assert len(neighbors) == 6
    assert len(set(neighbors)) == 6
    assert all(center.distance(n) == 1 for n in neighbors)


def test_neighbor_matches_neighbors_order():
    """neighbor(d) == neighbors()[d]."""
    center = HexCoord(-1, 4)
    for d in range(6):
        assert center.neighbor(d) == center.neighbors()[d]


def test_neighbor_invalid_direction_raises():
    """Kierunek spoza 0..5 to błąd wywołującego."""
    with pytest.raises(IndexError):
        ORIGIN.neighbor(6)
    with pytest.raises(IndexError):
        ORIGIN.neighbor(-1)


def test_direction_to():
    """direction_to zwraca indeks dla sąsiada i None dla innych pól."""
    assert ORIGIN.direction_to(HexCoord(0, -1)) == 0
    assert ORIGIN.direction_to(HexCoord(-1, 0)) == 5
    assert ORIGIN.direction_to(HexCoord(2, 0)) is None
    assert ORIGIN.direction_to(ORIGIN) is None


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DYSTANS
# ═══════════════════════════════════════════════════════════════════════════

def test_distance_examples():
    """Przykładowe dystanse."""
    assert ORIGIN.distance(HexCoord(2, 1)) == 3
    assert ORIGIN.distance(HexCoord(3, -3)) == 3
    assert HexCoord(1, 1).distance(HexCoord(1, 1)) == 0


def test_distance_symmetric_and_triangle():
    """Dystans jest symetryczny i spełnia nierówność trójkąta."""
    points = [HexCoord(q, r) for q in range(-2, 3) for r in range(-2, 3)]
    for a in points:
        for b in points:
            assert a.distance(b) == b.distance(a)
            for c in points[::5]:
                assert a.distance(c) <= a.distance(b) + b.distance(c)


def test_cube_invariant():
    """q + r + s == 0 także po arytmetyce."""
    coord = HexCoord(3, -1) + HexCoord(-5, 2) - HexCoord(1, 1)
    assert sum(coord.cube) == 0
    assert sum((coord * 3).cube) == 0


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KLUCZE
# ═══════════════════════════════════════════════════════════════════════════

def test_key_format():
    """Klucz ma format "q,r"."""
    assert HexCoord(-2, 3).to_key() == "-2,3"
    assert HexCoord.from_key("4,-1") == HexCoord(4, -1)


def test_key_is_bijective_on_disk():
    """to_key jest różnowartościowy i odwracalny na dysku."""
    coords = coords_in_radius(4)
    keys = {c.to_key() for c in coords}

    assert len(keys) == len(coords)
    assert all(HexCoord.from_key(c.to_key()) == c for c in coords)


@pytest.mark.parametrize("bad_key", ["", "1", "1,2,3", "a,b", "1;2"])
def test_from_key_rejects_malformed(bad_key):
    """Zły klucz rzuca ValueError."""
    with pytest.raises(ValueError):
        HexCoord.from_key(bad_key)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ROTACJA I DYSK
# ═══════════════════════════════════════════════════════════════════════════

def test_rotate_moves_direction_clockwise():
    """Jeden krok rotacji przenosi kierunek i na i + 1."""
    for d in range(6):
        rotated = ORIGIN.neighbor(d).rotate(1)
        assert rotated == ORIGIN.neighbor((d + 1) % 6)


def test_rotate_full_turn_is_identity():
    coord = HexCoord(3, -1)
    assert coord.rotate(6) == coord
    assert coord.rotate(-1).rotate(1) == coord


@pytest.mark.parametrize("radius,expected", [(0, 1), (1, 7), (5, 91), (10, 331)])
def test_coords_in_radius_count(radius, expected):
    """Dysk o promieniu R ma 3R² + 3R + 1 pól."""
    coords = coords_in_radius(radius)

    assert len(coords) == expected
    assert all(c.in_radius(radius) for c in coords)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ARYTMETYKA
# ═══════════════════════════════════════════════════════════════════════════

def test_add_subtract_keep_cube_invariant():
    a, b = HexCoord(2, -3), HexCoord(-1, 4)

    assert add(a, b) == HexCoord(1, 1)
    assert subtract(a, b) == HexCoord(3, -7)
    assert sum(subtract(a, b).cube) == 0
    assert subtract(add(a, b), b) == a


def test_direction_vector_matches_neighbor():
    for direction in range(6):
        assert ORIGIN + direction_vector(direction) == ORIGIN.neighbor(direction)
    assert direction_vector(6) == direction_vector(0)
