"""
Core module - podstawowe komponenty silnika.

Zawiera:
- HexCoord: System współrzędnych hexagonalnych (axial)
- HexGrid: Niemutowalna siatka kolorowych pól
- pathfinding: Algorytm A* dla auto-ruchu
- GameRNG: Deterministyczny generator losowości
- GameParams / SessionConfig: Niemutowalna konfiguracja
- ConfigLoader: Wczytywanie konfiguracji z defaults.yaml
"""

from .hex_coord import HexCoord, HEX_DIRECTIONS, ORIGIN, coords_in_radius
from .hex_grid import HexGrid, Cell
from .pathfinding import find_path, find_path_next_step
from .rng import GameRNG
from .params import GameParams, SessionConfig, DEFAULT_PALETTE
from .config_loader import ConfigLoader

__all__ = [
    "HexCoord", "HEX_DIRECTIONS", "ORIGIN", "coords_in_radius",
    "HexGrid", "Cell", "find_path", "find_path_next_step", "GameRNG",
    "GameParams", "SessionConfig", "DEFAULT_PALETTE", "ConfigLoader",
]
