"""
Algorytm A* (A-star) dla siatki hexagonalnej.

Używany przez auto-ruch protagonisty (MOVE_TO): znajduje najkrótszą
ścieżkę po polach siatki, omijając przeszkody.

Przeszkody:
    Zbiór przeszkód przekazuje wywołujący. W grze są to kolorowe pola,
    ale tylko wtedy, gdy protagonista niesie kolor - bez ładunku
    można chodzić po wszystkim.

Jak działa A*:
    1. Utrzymuj kolejkę open (do sprawdzenia) i zbiór closed (sprawdzone)
    2. Dla każdego node'a oblicz:
       - g_cost: koszt od startu do tego node'a
       - h_cost: heurystyka (odległość hex do celu)
       - f_cost: g_cost + h_cost
    3. Zawsze eksploruj node z najniższym f_cost
    4. Gdy dotrzesz do celu, odtwórz ścieżkę

Determinizm:
    Przy równym f_cost decyduje licznik wstawienia, a sąsiedzi są
    rozwijani w kanonicznej kolejności kierunków (0..5). Ta sama
    siatka zawsze daje tę samą ścieżkę.

Edge cases:
    - Start == Goal: zwraca [start]
    - Brak ścieżki: zwraca pustą listę []
    - Start lub Goal poza siatką: zwraca []
    - Goal jest przeszkodą: zwraca []
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Set
from dataclasses import dataclass, field
import heapq

from .hex_coord import HexCoord
from .hex_grid import HexGrid


@dataclass(order=True)
class _PathNode:
    """
    Węzeł w algorytmie A*.

    Sortowanie jest po (f_cost, order), co pozwala używać heapq
    jako deterministycznej kolejki priorytetowej.
    """
    f_cost: int
    order: int
    g_cost: int = field(compare=False)
    position: HexCoord = field(compare=False)


def colored_obstacles(grid: HexGrid) -> Set[HexCoord]:
    """Zbiór wszystkich kolorowych pól siatki (przeszkody przy przenoszeniu)."""
    return {cell.coord for cell in grid.get_colored_cells()}


def find_path(
    grid: HexGrid,
    start: HexCoord,
    goal: HexCoord,
    obstacles: Optional[Set[HexCoord]] = None,
    max_iterations: int = 5000,
) -> List[HexCoord]:
    """
    Znajduje najkrótszą ścieżkę między dwoma hexami.

    Args:
        grid: Siatka (wyznacza zbiór dostępnych pól)
        start: Pozycja startowa (nigdy nie jest traktowana jako przeszkoda)
        goal: Pozycja docelowa
        obstacles: Pola, na które nie wolno wejść
        max_iterations: Maksymalna liczba iteracji (zabezpieczenie)

    Returns:
        List[HexCoord]: Ścieżka od start do goal (włącznie z oboma).
                        Pusta lista jeśli ścieżka nie istnieje.

    Example:
        >>> grid = HexGrid.create_empty(3)
        >>> path = find_path(grid, HexCoord(0, 0), HexCoord(2, 0))
        >>> len(path)
        3
    """
    blocked = obstacles or set()

    if not grid.contains(start) or not grid.contains(goal):
        return []

    if start == goal:
        return [start]

    if goal in blocked:
        return []

    def walkable(pos: HexCoord) -> bool:
        return grid.contains(pos) and pos not in blocked

    return _astar(start, goal, walkable, max_iterations)


def _astar(
    start: HexCoord,
    goal: HexCoord,
    walkable: Callable[[HexCoord], bool],
    max_iterations: int,
) -> List[HexCoord]:
    """Właściwa pętla A* (bez walidacji wejścia)."""
    open_set: List[_PathNode] = []
    g_costs: Dict[HexCoord, int] = {start: 0}
    closed_set: Set[HexCoord] = set()
    parents: Dict[HexCoord, HexCoord] = {}

    counter = 0
    heapq.heappush(open_set, _PathNode(start.distance(goal), counter, 0, start))

    iterations = 0
    while open_set and iterations < max_iterations:
        iterations += 1

        current = heapq.heappop(open_set)
        if current.position in closed_set:
            continue
        closed_set.add(current.position)

        if current.position == goal:
            return _reconstruct_path(parents, start, goal)

        for neighbor in current.position.neighbors():
            if neighbor in closed_set or not walkable(neighbor):
                continue

            tentative_g = current.g_cost + 1
            if neighbor not in g_costs or tentative_g < g_costs[neighbor]:
                g_costs[neighbor] = tentative_g
                parents[neighbor] = current.position
                counter += 1
                heapq.heappush(
                    open_set,
                    _PathNode(tentative_g + neighbor.distance(goal), counter, tentative_g, neighbor),
                )

    return []


def _reconstruct_path(
    parents: Dict[HexCoord, HexCoord],
    start: HexCoord,
    goal: HexCoord,
) -> List[HexCoord]:
    """Odtwarza ścieżkę od goal do start używając mapy rodziców."""
    path = [goal]
    current = goal

    while current != start:
        current = parents[current]
        path.append(current)

    path.reverse()
    return path


def find_path_next_step(
    grid: HexGrid,
    start: HexCoord,
    goal: HexCoord,
    obstacles: Optional[Set[HexCoord]] = None,
) -> Optional[HexCoord]:
    """
    Znajduje tylko następny krok na ścieżce do celu.

    Auto-ruch przelicza trasę co krok - siatka mogła się zmienić
    (np. gracz coś upuścił), więc stara ścieżka nie jest trzymana.

    Returns:
        Optional[HexCoord]: Następny hex lub None jeśli brak ścieżki/jesteśmy w celu
    """
    path = find_path(grid, start, goal, obstacles)

    if len(path) < 2:
        return None

    return path[1]
