"""
Siatka hexagonalna (HexGrid) - rzadka mapa kolorowych i pustych pól.

HexGrid przechowuje świat gry:
- Określa zbiór pól (dysk o promieniu R wokół (0, 0))
- Dla każdego pola trzyma kolor (indeks palety) albo pustkę
- Każda modyfikacja zwraca NOWĄ siatkę (semantyka wartości)

Rozmiar siatki:
    Dysk o promieniu R zawiera dokładnie 3R² + 3R + 1 pól:

    R=0  ->   1 pole
    R=1  ->   7 pól
    R=5  ->  91 pól
    R=10 -> 331 pól

Brak pola vs puste pole:
    get_cell() zwraca None dla współrzędnej spoza siatki,
    a Cell(color_index=None) dla pola, które istnieje, ale jest puste.
    To rozróżnienie jest ważne - ruch i wymiana ze slotem traktują
    "brak pola" jako no-op.

Generowanie świata:
    Dla każdego pola (w stałej kolejności q, potem r):
        rng.random() < probability  ->  kolor = int(rng.random() * palette_size)
        w przeciwnym razie          ->  puste

Przykład użycia:
    >>> grid = HexGrid.create_empty(2)
    >>> len(grid)
    19
    >>> g2 = grid.set_cell(HexCoord(1, 0), 3)
    >>> g2.get_cell(HexCoord(1, 0)).color_index
    3
    >>> grid.get_cell(HexCoord(1, 0)).color_index is None   # stara siatka bez zmian
    True
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, TYPE_CHECKING

from .hex_coord import HexCoord, coords_in_radius

if TYPE_CHECKING:
    from .rng import GameRNG


@dataclass(frozen=True)
class Cell:
    """
    Pojedyncze pole siatki.

    Attributes:
        coord (HexCoord): Pozycja pola
        color_index (Optional[int]): Indeks koloru w palecie lub None (puste)
    """
    coord: HexCoord
    color_index: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """True jeśli pole nie ma koloru."""
        return self.color_index is None


@dataclass(frozen=True)
class HexGrid:
    """
    Niemutowalna siatka hexagonalna w kształcie dysku.

    Attributes:
        radius (int): Promień dysku
        _cells (Dict[HexCoord, Optional[int]]): Mapa pozycja -> kolor

    Note:
        - Słownik _cells nigdy nie jest modyfikowany po utworzeniu siatki
        - set_cell / set_cells kopiują słownik i zwracają nową instancję
        - Siatki porównują się po promieniu i zawartości
    """
    radius: int
    _cells: Dict[HexCoord, Optional[int]] = field(default_factory=dict, repr=False)

    # ─────────────────────────────────────────────────────────────────────────
    # TWORZENIE
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def create_empty(cls, radius: int) -> HexGrid:
        """
        Tworzy siatkę, w której wszystkie pola są puste.

        Args:
            radius: Promień dysku (>= 0)

        Returns:
            HexGrid: Siatka z 3R² + 3R + 1 pustymi polami

        Raises:
            ValueError: Jeśli radius < 0
        """
        if radius < 0:
            raise ValueError(f"Grid radius must be >= 0, got {radius}")
        return cls(radius=radius, _cells={coord: None for coord in coords_in_radius(radius)})

    @classmethod
    def generate(
        cls,
        radius: int,
        probability: float,
        palette_size: int,
        rng: "GameRNG",
    ) -> HexGrid:
        """
        Generuje początkowy świat z losowym pokolorowaniem.

        Args:
            radius: Promień dysku
            probability: Szansa na kolor dla każdego pola (0.0 - 1.0)
            palette_size: Liczba kolorów w palecie
            rng: Deterministyczny generator

        Returns:
            HexGrid: Wygenerowana siatka

        Note:
            probability=0 daje pustą siatkę, probability=1 - w pełni
            pokolorowaną. Ten sam seed daje zawsze ten sam świat.
        """
        if radius < 0:
            raise ValueError(f"Grid radius must be >= 0, got {radius}")

        cells: Dict[HexCoord, Optional[int]] = {}
        for coord in coords_in_radius(radius):
            if palette_size > 0 and rng.random() < probability:
                cells[coord] = int(rng.random() * palette_size)
            else:
                cells[coord] = None
        return cls(radius=radius, _cells=cells)

    # ─────────────────────────────────────────────────────────────────────────
    # ODCZYT
    # ─────────────────────────────────────────────────────────────────────────

    def contains(self, coord: HexCoord) -> bool:
        """Sprawdza czy pole istnieje w siatce."""
        return coord in self._cells

    def get_cell(self, coord: HexCoord) -> Optional[Cell]:
        """
        Zwraca pole na danej pozycji.

        Args:
            coord: Pozycja

        Returns:
            Optional[Cell]: Pole (także puste) lub None jeśli poza siatką
        """
        if coord not in self._cells:
            return None
        return Cell(coord, self._cells[coord])

    def color_at(self, coord: HexCoord) -> Optional[int]:
        """Kolor pola lub None (puste albo poza siatką)."""
        return self._cells.get(coord)

    def is_empty(self, coord: HexCoord) -> bool:
        """True jeśli pole istnieje i nie ma koloru."""
        return coord in self._cells and self._cells[coord] is None

    def is_colored(self, coord: HexCoord) -> bool:
        """True jeśli pole istnieje i ma kolor."""
        return self._cells.get(coord) is not None

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPIS (zwraca nową siatkę)
    # ─────────────────────────────────────────────────────────────────────────

    def set_cell(self, coord: HexCoord, color_index: Optional[int]) -> HexGrid:
        """
        Zwraca nową siatkę z jednym zmienionym polem.

        Args:
            coord: Pozycja pola
            color_index: Nowy kolor lub None (wyczyszczenie)

        Returns:
            HexGrid: Nowa siatka; ta sama instancja jeśli nic się nie zmienia

        Note:
            - Pozycja spoza siatki -> no-op (zwraca self)
            - Ten sam kolor co obecny -> no-op (zwraca self)
        """
        return self.set_cells([(coord, color_index)])

    def set_cells(self, updates: Iterable[Tuple[HexCoord, Optional[int]]]) -> HexGrid:
        """
        Wsadowa wersja set_cell - jedna kopia słownika dla wielu zmian.

        Args:
            updates: Pary (pozycja, kolor)

        Returns:
            HexGrid: Nowa siatka (lub self jeśli brak zmian)
        """
        changes = [
            (coord, color)
            for coord, color in updates
            if coord in self._cells and self._cells[coord] != color
        ]
        if not changes:
            return self

        cells = dict(self._cells)
        for coord, color in changes:
            cells[coord] = color
        return HexGrid(radius=self.radius, _cells=cells)

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def coords(self) -> List[HexCoord]:
        """Wszystkie pozycje siatki."""
        return list(self._cells.keys())

    def cells(self) -> Iterator[Cell]:
        """Iterator po wszystkich polach."""
        for coord, color in self._cells.items():
            yield Cell(coord, color)

    def get_empty_cells(self) -> List[Cell]:
        """Wszystkie puste pola."""
        return [Cell(coord, None) for coord, color in self._cells.items() if color is None]

    def get_colored_cells(self) -> List[Cell]:
        """Wszystkie pola z kolorem."""
        return [Cell(coord, color) for coord, color in self._cells.items() if color is not None]

    def count_colors(self) -> Dict[int, int]:
        """
        Liczy wystąpienia każdego koloru.

        Returns:
            Dict[int, int]: Mapa color_index -> liczba pól
        """
        counts: Dict[int, int] = {}
        for color in self._cells.values():
            if color is not None:
                counts[color] = counts.get(color, 0) + 1
        return counts

    def total_colored(self) -> int:
        """Liczba pól z kolorem."""
        return sum(1 for color in self._cells.values() if color is not None)

    def count_adjacent_same_color(self, palette_size: int) -> List[int]:
        """
        Dla każdego koloru liczy pola, które mają sąsiada tego samego koloru.

        Prosta metryka "skupienia" kolorów na planszy.

        Args:
            palette_size: Liczba kolorów w palecie

        Returns:
            List[int]: Lista długości palette_size
        """
        result = [0] * palette_size
        if palette_size <= 0:
            return result

        for coord, color in self._cells.items():
            if color is None:
                continue
            if any(self._cells.get(n) == color for n in coord.neighbors()):
                result[color % palette_size] += 1
        return result

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self._cells

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG / WIZUALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(self, marks: Optional[Dict[HexCoord, str]] = None) -> str:
        """
        Zwraca tekstową reprezentację siatki do debugowania.

        Legenda:
            . = puste pole
            0-9 = indeks koloru (powyżej 9: #)
            marks = dodatkowe znaczniki (np. {protagonist: "@"})

        Returns:
            str: Tekstowa wizualizacja (jeden wiersz na r)
        """
        marks = marks or {}
        lines = []
        for r in range(-self.radius, self.radius + 1):
            indent = " " * abs(r)
            row = []
            for q in range(-self.radius, self.radius + 1):
                pos = HexCoord(q, r)
                if pos not in self._cells:
                    continue
                if pos in marks:
                    row.append(marks[pos])
                    continue
                color = self._cells[pos]
                if color is None:
                    row.append(".")
                else:
                    row.append(str(color) if color < 10 else "#")
            lines.append(indent + " ".join(row))
        return "\n".join(lines)
