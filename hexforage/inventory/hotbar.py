"""
Hotbar - 6 slotów na kolory i wymiana kolorów z polem focus.

Każda operacja tutaj przenosi kolor, a nie go tworzy ani niszczy:
liczba jednostek koloru w grze jest stała (patrz total_color_count).

OPERACJE:
═══════════════════════════════════════════════════════════════════

    eat_to_hotbar
    ─────────────────────────────────────────────────────────────
    Kolor z focus -> pierwszy pusty slot (od 0 w górę).
    Pełny hotbar -> wybrany slot jest wymieniany: jego kolor wraca
    na pole focus (jawna wymiana, nic nie ginie).

    exchange_with_slot(index)
    ─────────────────────────────────────────────────────────────
        slot    focus     wynik
        ─────   ─────     ─────────────────────────────
        pusty   pusty     no-op
        pusty   kolor     ABSORB: focus -> slot
        kolor   pusty     TAKE:   slot -> focus
        kolor   kolor     SWAP:   zamiana miejscami

    perform_context_action (główny przycisk, pojedyncze naciśnięcie)
    ─────────────────────────────────────────────────────────────
        niesie kolor                 -> upuść
        focus kolorowe               -> zjedz do hotbara
        focus puste, slot zajęty     -> postaw kolor ze slotu
        w przeciwnym razie           -> no-op

Przykład:
    >>> state = eat_to_hotbar(state)          # focus miał kolor 2
    >>> state.hotbar
    (2, None, None, None, None, None)
"""

from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple

from ..core.params import GameParams
from ..state.game_state import GameState, HOTBAR_SIZE
from ..capture.capture import drop_carried


class ExchangeKind(Enum):
    """Rodzaj wymiany między slotem a polem focus."""
    NONE = "none"
    ABSORB = "absorb"
    TAKE = "take"
    SWAP = "swap"


def _is_valid_slot(index: int) -> bool:
    return isinstance(index, int) and 0 <= index < HOTBAR_SIZE


def _with_slot(hotbar: Tuple[Optional[int], ...], index: int, color: Optional[int]) -> Tuple[Optional[int], ...]:
    slots = list(hotbar)
    slots[index] = color
    return tuple(slots)


def first_empty_slot(state: GameState) -> Optional[int]:
    """Indeks pierwszego pustego slotu lub None (hotbar pełny)."""
    for index, color in enumerate(state.hotbar):
        if color is None:
            return index
    return None


def classify_exchange(state: GameState, index: int) -> ExchangeKind:
    """Który z czterech przypadków wymiany zaszedłby dla slotu index."""
    if not _is_valid_slot(index):
        return ExchangeKind.NONE
    slot = state.hotbar[index]
    focus = state.focus_color()
    if slot is None and focus is None:
        return ExchangeKind.NONE
    if slot is None:
        return ExchangeKind.ABSORB
    if focus is None:
        return ExchangeKind.TAKE
    return ExchangeKind.SWAP


# ═══════════════════════════════════════════════════════════════════════════
# OPERACJE
# ═══════════════════════════════════════════════════════════════════════════

def select_hotbar_slot(state: GameState, index: int) -> GameState:
    """Wybiera slot. Indeks spoza 0..5 jest ignorowany."""
    if not _is_valid_slot(index) or index == state.selected_hotbar_index:
        return state
    return state.evolve(selected_hotbar_index=index)


def eat_to_hotbar(state: GameState) -> GameState:
    """
    Zjada kolor z pola focus do hotbara.

    Returns:
        GameState: Nowy stan (no-op gdy focus puste, poza siatką
                   albo protagonista niesie kolor)

    Note:
        Przy pełnym hotbarze kolor z wybranego slotu trafia na focus.
    """
    color = state.focus_color()
    if color is None or state.is_carrying:
        return state

    index = first_empty_slot(state)
    if index is None:
        index = state.selected_hotbar_index
    evicted = state.hotbar[index]

    grid = state.active_grid.set_cell(state.focus, evicted)
    return state.with_active_grid(grid).evolve(hotbar=_with_slot(state.hotbar, index, color))


def exchange_with_slot(state: GameState, index: int) -> GameState:
    """
    Wymienia zawartość pola focus ze slotem hotbara.

    Args:
        state: Aktualny stan
        index: Slot 0..5 (inne wartości ignorowane)

    Returns:
        GameState: Nowy stan; wymiana inna niż no-op wybiera też slot
    """
    kind = classify_exchange(state, index)
    if kind is ExchangeKind.NONE:
        return state
    if not state.active_grid.contains(state.focus):
        return state

    slot_color = state.hotbar[index]
    focus_color = state.focus_color()

    grid = state.active_grid.set_cell(state.focus, slot_color)
    return state.with_active_grid(grid).evolve(
        hotbar=_with_slot(state.hotbar, index, focus_color),
        selected_hotbar_index=index,
    )


def place_from_selected_slot(state: GameState) -> GameState:
    """Stawia kolor z wybranego slotu na pustym polu focus."""
    if state.selected_slot_color is None or not state.active_grid.is_empty(state.focus):
        return state
    return exchange_with_slot(state, state.selected_hotbar_index)


def perform_context_action(state: GameState, params: GameParams) -> GameState:
    """
    Akcja głównego przycisku (pojedyncze naciśnięcie).

    Kolejność:
        1. Niesie kolor -> drop_carried
        2. Focus kolorowe -> eat_to_hotbar
        3. Focus puste i wybrany slot zajęty -> place_from_selected_slot
        4. No-op
    """
    if state.is_carrying:
        return drop_carried(state, params)
    if state.focus_color() is not None:
        return eat_to_hotbar(state)
    if state.selected_slot_color is not None:
        return place_from_selected_slot(state)
    return state


def set_hotbar_slot(state: GameState, index: int, color_index: Optional[int]) -> GameState:
    """
    Bezpośrednio ustawia zawartość slotu (edycja/testy).

    Tak jak set_cell - źródło/ujście koloru, poza zasadą zachowania.
    """
    if not _is_valid_slot(index) or state.hotbar[index] == color_index:
        return state
    return state.evolve(hotbar=_with_slot(state.hotbar, index, color_index))
