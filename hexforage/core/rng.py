"""
Deterministyczny generator liczb losowych (RNG).

Gra musi być w pełni odtwarzalna - ten sam seed i ta sama sekwencja
komend muszą zawsze dawać identyczne snapshoty stanu. To pozwala na:
- Replay sesji z logu zdarzeń
- Debugowanie nieudanych przechwyceń
- Testy jednostkowe mechaniki losowego rzutu

GameRNG opakowuje Pythonowy random.Random.

Jak używać:
    - Każda sesja gry ma WŁASNĄ instancję GameRNG
    - NIE używaj globalnego random - jest współdzielony
    - Rzut przechwycenia pobiera DOKŁADNIE jedną wartość random()

Przykład użycia:
    >>> rng = GameRNG(seed=12345)
    >>> rng.random()              # zawsze to samo dla seed=12345
    0.41661987254534116
    >>> rng.roll_chance(0.8)      # 80% szansy na przechwycenie
    True

Ważne:
    NIGDY nie używaj random.random() bezpośrednio w logice gry!
    Zawsze używaj instancji GameRNG przekazanej do tick().
"""

from __future__ import annotations
import random
from typing import List, TypeVar, Sequence

T = TypeVar('T')


class GameRNG:
    """
    Deterministyczny generator losowości dla sesji gry.

    Attributes:
        seed (int): Ziarno użyte do inicjalizacji
        _rng (random.Random): Wewnętrzny generator

    Example:
        >>> rng1 = GameRNG(42)
        >>> rng2 = GameRNG(42)
        >>> rng1.random() == rng2.random()  # ten sam seed = te same wyniki
        True
    """

    def __init__(self, seed: int):
        """
        Tworzy nowy generator z podanym seedem.

        Args:
            seed: Ziarno losowości. Ten sam seed = te same wyniki.
        """
        self.seed = seed
        self._rng = random.Random(seed)

    # ─────────────────────────────────────────────────────────────────────────
    # PODSTAWOWE METODY
    # ─────────────────────────────────────────────────────────────────────────

    def random(self) -> float:
        """
        Zwraca losową liczbę z przedziału [0.0, 1.0).

        Returns:
            float: Liczba losowa
        """
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Losowa liczba całkowita z przedziału [a, b] (włącznie)."""
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        """
        Wybiera losowy element z sekwencji.

        Raises:
            IndexError: Jeśli sekwencja jest pusta
        """
        return self._rng.choice(seq)

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        """Wybiera k unikalnych losowych elementów z sekwencji."""
        return self._rng.sample(list(seq), k)

    # ─────────────────────────────────────────────────────────────────────────
    # METODY SPECYFICZNE DLA GRY
    # ─────────────────────────────────────────────────────────────────────────

    def roll_chance(self, chance: float) -> bool:
        """
        Rzuca kością na szansę (0.0 - 1.0).

        Args:
            chance: Szansa na sukces (0.0 = 0%, 1.0 = 100%)

        Returns:
            bool: True jeśli sukces (random() < chance)

        Note:
            Zużywa dokładnie jedną wartość z sekwencji.
        """
        return self.random() < chance

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    def get_state(self) -> tuple:
        """Zwraca aktualny stan RNG (do zapisania/odtworzenia)."""
        return self._rng.getstate()

    def set_state(self, state: tuple) -> None:
        """Ustawia stan RNG (do odtworzenia z zapisanego stanu)."""
        self._rng.setstate(state)

    def fork(self) -> "GameRNG":
        """
        Tworzy nowy RNG z seedem bazowanym na aktualnym stanie.

        Przydatne dla izolowanych systemów (np. bot autoplay), które
        nie powinny przesuwać głównej sekwencji rzutów przechwycenia.

        Returns:
            GameRNG: Nowy generator
        """
        new_seed = self.randint(0, 2**31 - 1)
        return GameRNG(new_seed)

    def __repr__(self) -> str:
        return f"GameRNG(seed={self.seed})"
