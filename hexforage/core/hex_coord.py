"""
System współrzędnych hexagonalnych (Axial Coordinates).

Używamy Axial Coordinates (q, r) gdzie:
- q = kolumna (oś ukośna w prawo)
- r = wiersz (oś pionowa, rośnie w dół)

Konwersja do Cube Coordinates:
    s = -q - r
    Cube: (q, r, s) gdzie q + r + s = 0

Układ sąsiadów (flat-top hexagons, zgodnie z zegarem od góry):
    Kierunek         (dq, dr)
    ─────────────────────────────
    0  UP     (↑)    ( 0, -1)
    1  UP_R   (↗)    (+1, -1)
    2  DOWN_R (↘)    (+1,  0)
    3  DOWN   (↓)    ( 0, +1)
    4  DOWN_L (↙)    (-1, +1)
    5  UP_L   (↖)    (-1,  0)

    Kierunek (i + 3) % 6 jest zawsze przeciwny do i.

Odległość między hexami:
    distance = (|dq| + |dr| + |dq + dr|) / 2

Klucz tekstowy:
    Każda współrzędna ma kanoniczny klucz "q,r" (np. "-2,3").
    to_key / from_key są bijekcją - używane w snapshotach i API.

Przykład użycia:
    >>> a = HexCoord(0, 0)
    >>> b = HexCoord(2, 1)
    >>> a.distance(b)
    3
    >>> a.neighbor(0)
    HexCoord(q=0, r=-1)
    >>> HexCoord.from_key("2,1") == b
    True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple, Optional


# Kierunki sąsiadów w układzie axial
# Kolejność: UP, UP_R, DOWN_R, DOWN, DOWN_L, UP_L
HEX_DIRECTIONS: List[Tuple[int, int]] = [
    (0, -1),   # 0 - up
    (+1, -1),  # 1 - up-right
    (+1, 0),   # 2 - down-right
    (0, +1),   # 3 - down
    (-1, +1),  # 4 - down-left
    (-1, 0),   # 5 - up-left
]

DIR_UP = 0
DIR_UP_RIGHT = 1
DIR_DOWN_RIGHT = 2
DIR_DOWN = 3
DIR_DOWN_LEFT = 4
DIR_UP_LEFT = 5


@dataclass(frozen=True)
class HexCoord:
    """
    Współrzędna hexagonalna w systemie axial (q, r).

    Klasa jest niemutowalna (frozen=True).
    Może być używana jako klucz w słowniku lub element zbioru.

    Attributes:
        q (int): Współrzędna kolumny
        r (int): Współrzędna wiersza

    Note:
        Współrzędna s w systemie cube jest wyliczana jako: s = -q - r
        Zachodzi zawsze: q + r + s = 0 (również po każdej operacji
        arytmetycznej, bo s nigdy nie jest przechowywane).
    """
    q: int
    r: int

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def s(self) -> int:
        """
        Trzecia współrzędna w systemie cube.

        Returns:
            int: Wartość s spełniająca q + r + s = 0
        """
        return -self.q - self.r

    @property
    def cube(self) -> Tuple[int, int, int]:
        """Konwersja do współrzędnych cube (q, r, s)."""
        return (self.q, self.r, self.s)

    @property
    def axial(self) -> Tuple[int, int]:
        """Współrzędne axial jako krotka."""
        return (self.q, self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ I PROMIEŃ
    # ─────────────────────────────────────────────────────────────────────────

    def distance(self, other: HexCoord) -> int:
        """
        Oblicza odległość między dwoma hexami (liczba kroków).

        Wzór (cube distance):
            distance = (|dq| + |dr| + |dq + dr|) / 2

        Args:
            other: Druga współrzędna hexagonalna

        Returns:
            int: Odległość w liczbie kroków (hexów)

        Example:
            >>> HexCoord(0, 0).distance(HexCoord(2, 1))
            3
        """
        dq = self.q - other.q
        dr = self.r - other.r
        return (abs(dq) + abs(dr) + abs(dq + dr)) // 2

    def length(self) -> int:
        """Odległość od środka układu (0, 0)."""
        return max(abs(self.q), abs(self.r), abs(self.s))

    def in_radius(self, radius: int) -> bool:
        """
        Sprawdza czy hex leży w dysku o danym promieniu wokół (0, 0).

        Granica jest włączna: hex w odległości dokładnie `radius`
        należy do dysku.

        Args:
            radius: Promień dysku (>= 0)

        Returns:
            bool: True jeśli max(|q|, |r|, |s|) <= radius
        """
        return self.length() <= radius

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI I KIERUNKI
    # ─────────────────────────────────────────────────────────────────────────

    def neighbors(self) -> List[HexCoord]:
        """
        Zwraca listę 6 sąsiednich hexów.

        Kolejność sąsiadów zgodna z HEX_DIRECTIONS
        (UP, UP_R, DOWN_R, DOWN, DOWN_L, UP_L).

        Returns:
            List[HexCoord]: Lista 6 sąsiadów
        """
        return [
            HexCoord(self.q + dq, self.r + dr)
            for dq, dr in HEX_DIRECTIONS
        ]

    def neighbor(self, direction: int) -> HexCoord:
        """
        Zwraca sąsiada w określonym kierunku.

        Args:
            direction: Indeks kierunku (0-5)

        Returns:
            HexCoord: Sąsiad w podanym kierunku

        Raises:
            IndexError: Jeśli direction nie jest w zakresie 0-5
        """
        if not 0 <= direction < 6:
            raise IndexError(f"Direction {direction} outside 0..5")
        dq, dr = HEX_DIRECTIONS[direction]
        return HexCoord(self.q + dq, self.r + dr)

    def direction_to(self, other: HexCoord) -> Optional[int]:
        """
        Zwraca indeks kierunku prowadzącego do sąsiedniego hexa.

        Args:
            other: Hex docelowy

        Returns:
            Optional[int]: Indeks 0-5 lub None jeśli other nie jest sąsiadem
        """
        delta = (other.q - self.q, other.r - self.r)
        if delta in HEX_DIRECTIONS:
            return HEX_DIRECTIONS.index(delta)
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # ROTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def rotate(self, steps: int) -> HexCoord:
        """
        Obraca współrzędną wokół (0, 0) o steps × 60°.

        Jeden krok zgodnie z zegarem przenosi kierunek i na kierunek i+1
        (np. UP -> UP_R). W układzie cube to:
            (q, r, s) -> (-r, -s, -q)

        Args:
            steps: Liczba kroków po 60° (ujemne = przeciwnie do zegara)

        Returns:
            HexCoord: Obrócona współrzędna

        Note:
            - rotate(6) jest identycznością
            - odległość od środka jest zachowana
        """
        q, r, s = self.cube
        for _ in range(steps % 6):
            q, r, s = -r, -s, -q
        return HexCoord(q, r)

    # ─────────────────────────────────────────────────────────────────────────
    # KLUCZE
    # ─────────────────────────────────────────────────────────────────────────

    def to_key(self) -> str:
        """
        Kanoniczny klucz tekstowy "q,r".

        Returns:
            str: Klucz, np. "-1,2"
        """
        return f"{self.q},{self.r}"

    @classmethod
    def from_key(cls, key: str) -> HexCoord:
        """
        Odtwarza współrzędną z klucza "q,r".

        Args:
            key: Klucz z to_key()

        Returns:
            HexCoord: Współrzędna

        Raises:
            ValueError: Jeśli klucz ma zły format
        """
        parts = key.split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid hex key: {key!r}")
        try:
            return cls(int(parts[0]), int(parts[1]))
        except ValueError:
            raise ValueError(f"Invalid hex key: {key!r}") from None

    # ─────────────────────────────────────────────────────────────────────────
    # OPERATORY ARYTMETYCZNE
    # ─────────────────────────────────────────────────────────────────────────

    def __add__(self, other: HexCoord) -> HexCoord:
        """Dodawanie współrzędnych."""
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        """Odejmowanie współrzędnych."""
        return HexCoord(self.q - other.q, self.r - other.r)

    def __mul__(self, scalar: int) -> HexCoord:
        """Mnożenie przez skalar."""
        return HexCoord(self.q * scalar, self.r * scalar)

    def __neg__(self) -> HexCoord:
        """Negacja (punkt przeciwny względem origin)."""
        return HexCoord(-self.q, -self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"HexCoord(q={self.q}, r={self.r})"

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


ORIGIN = HexCoord(0, 0)


# ─────────────────────────────────────────────────────────────────────────────
# FUNKCJE POMOCNICZE
# ─────────────────────────────────────────────────────────────────────────────

def add(a: HexCoord, b: HexCoord) -> HexCoord:
    """Suma współrzędnych (alias dla a + b)."""
    return a + b


def subtract(a: HexCoord, b: HexCoord) -> HexCoord:
    """Różnica współrzędnych (alias dla a - b)."""
    return a - b


def direction_vector(direction: int) -> HexCoord:
    """Wektor jednostkowy kierunku jako HexCoord."""
    dq, dr = HEX_DIRECTIONS[direction % 6]
    return HexCoord(dq, dr)


def coords_in_radius(radius: int) -> List[HexCoord]:
    """
    Wszystkie współrzędne w dysku o promieniu `radius` wokół (0, 0).

    Kolejność jest deterministyczna: q rosnąco, potem r rosnąco.
    Liczba hexów: 3R² + 3R + 1.

    Args:
        radius: Promień (>= 0)

    Returns:
        List[HexCoord]: Lista współrzędnych
    """
    result = []
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            result.append(HexCoord(q, r))
    return result
