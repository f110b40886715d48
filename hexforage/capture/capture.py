"""
Maszyna stanów przechwycenia koloru (capture).

Gracz trzyma przycisk akcji skierowany na sąsiednie kolorowe pole.
Po czasie ładowania silnik rzuca kością - sukces zabiera kolor z pola
(protagonista go niesie), porażka włącza cooldown.

FAZY:
═══════════════════════════════════════════════════════════════════

    IDLE (Bezczynność)
    ─────────────────────────────────────────────────────────────
    Brak ładowania, brak cooldownu. Można wejść w tryb akcji.

    Wyjście:
        -> CHARGING (start_action_mode na poprawny cel)

    CHARGING (Ładowanie)
    ─────────────────────────────────────────────────────────────
    capture_charge_start_tick ustawiony. Trwa hold_duration ticków
    (w inwentarzu 1 tick).

    Wyjście:
        -> IDLE (end_action_mode przed końcem - bez kary)
        -> RESOLVING_SUCCESS (rzut < szansa)
        -> RESOLVING_FAILURE (rzut >= szansa)

    RESOLVING_SUCCESS (Sukces)
    ─────────────────────────────────────────────────────────────
    Pole wyczyszczone, carried_color ustawiony, flash SUCCESS.
    Cooldown bez zmian.

    RESOLVING_FAILURE (Porażka)
    ─────────────────────────────────────────────────────────────
    Siatka bez zmian, flash FAILURE,
    cooldown = capture_failure_cooldown_ticks.

    COOLDOWN
    ─────────────────────────────────────────────────────────────
    capture_cooldown_ticks_remaining > 0. Nowe ładowanie zablokowane.

    Wyjście:
        -> IDLE (cooldown doszedł do 0)

DIAGRAM TRANZYCJI:
═══════════════════════════════════════════════════════════════════

    IDLE ──start──► CHARGING ──rzut──┬──► RESOLVING_SUCCESS ──► IDLE
      ▲                │             │
      │             end (wcześnie)   └──► RESOLVING_FAILURE ──► COOLDOWN
      └────────────────┘                                           │
      ▲                                                            │
      └──────────────────────── cooldown = 0 ◄─────────────────────┘

SZANSA PRZECHWYCENIA:
═══════════════════════════════════════════════════════════════════

    Zależy od dystansu na kole palety między kolorem bazowym gracza
    a kolorem celu (paleta 8 kolorów -> max dystans 4):

        dystans 0  ->  chance_base_percent (100%)
        dystans d  ->  max(min, base - penalty * d)
        dystans 4  ->  chance_min_percent (10%)

    Domyślnie: 100 / 80 / 60 / 40 / 10.
    W inwentarzu szansa jest zawsze 100%.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..core.params import GameParams
from ..state.game_state import GameState, Flash, FlashKind


class CapturePhase(Enum):
    """Faza maszyny stanów przechwycenia (wyliczana ze snapshotu)."""
    IDLE = auto()
    CHARGING = auto()
    RESOLVING_SUCCESS = auto()
    RESOLVING_FAILURE = auto()
    COOLDOWN = auto()


class CaptureRejection(Enum):
    """Powód odrzucenia próby przechwycenia."""
    ALREADY_CARRYING = "already_carrying"
    ON_COOLDOWN = "on_cooldown"
    TARGET_EMPTY = "target_empty"
    NOT_ADJACENT = "not_adjacent"
    BLOCKED_BY_COLOR = "blocked_by_color"
    NOT_CARRYING = "not_carrying"
    ALREADY_IN_ACTION_MODE = "already_in_action_mode"


@dataclass(frozen=True)
class CaptureCheck:
    """
    Wynik sprawdzenia możliwości przechwycenia.

    Attributes:
        allowed (bool): Czy przechwycenie jest możliwe
        reason (Optional[CaptureRejection]): Powód odrzucenia
        chance_percent (Optional[int]): Szansa (tylko gdy allowed)
    """
    allowed: bool
    reason: Optional[CaptureRejection] = None
    chance_percent: Optional[int] = None


# ═══════════════════════════════════════════════════════════════════════════
# SZANSA
# ═══════════════════════════════════════════════════════════════════════════

def palette_distance(a: int, b: int, palette_size: int) -> int:
    """
    Dystans na kole palety (zawijany).

    Example:
        >>> palette_distance(0, 7, 8)
        1
        >>> palette_distance(0, 4, 8)
        4
    """
    if palette_size <= 0:
        return 0
    diff = abs(a - b) % palette_size
    return min(diff, palette_size - diff)


def capture_chance_percent(
    params: GameParams,
    color_index: int,
    base_index: Optional[int] = None,
) -> int:
    """
    Szansa przechwycenia koloru w procentach (0-100).

    Args:
        params: Parametry gry
        color_index: Kolor celu
        base_index: Kolor bazowy gracza (domyślnie player_base_color_index)

    Returns:
        int: Szansa, monotonicznie malejąca z dystansem palety
    """
    base = params.player_base_color_index if base_index is None else base_index
    max_dist = params.max_palette_distance
    dist = palette_distance(base, color_index, params.palette_size)

    if max_dist == 0 or dist == 0:
        chance = params.chance_base_percent
    elif dist >= max_dist:
        chance = params.chance_min_percent
    else:
        raw = params.chance_base_percent - params.chance_penalty_per_palette_distance * dist
        chance = max(params.chance_min_percent, raw)

    return max(0, min(100, chance))


def hold_duration_ticks(state: GameState, params: GameParams) -> int:
    """Czas ładowania: w świecie z parametrów, w inwentarzu 1 tick."""
    return 1 if state.in_inventory else params.capture_hold_duration_ticks


# ═══════════════════════════════════════════════════════════════════════════
# SPRAWDZANIE
# ═══════════════════════════════════════════════════════════════════════════

def can_capture(state: GameState, params: GameParams) -> CaptureCheck:
    """
    Sprawdza czy można przechwycić kolor z pola focus.

    Kolejność warunków (pierwszy niespełniony wygrywa):
        1. already_carrying - protagonista już coś niesie
        2. on_cooldown      - trwa cooldown
        3. target_empty     - focus puste lub poza siatką
        4. not_adjacent     - focus nie sąsiaduje z protagonistą
                              (w inwentarzu pomijane)

    Returns:
        CaptureCheck: allowed + reason lub chance_percent
    """
    if state.is_carrying:
        return CaptureCheck(False, CaptureRejection.ALREADY_CARRYING)
    if state.capture_cooldown_ticks_remaining > 0:
        return CaptureCheck(False, CaptureRejection.ON_COOLDOWN)

    color = state.focus_color()
    if color is None:
        return CaptureCheck(False, CaptureRejection.TARGET_EMPTY)

    if state.in_inventory:
        return CaptureCheck(True, chance_percent=100)

    if state.protagonist.distance(state.focus) != 1:
        return CaptureCheck(False, CaptureRejection.NOT_ADJACENT)

    return CaptureCheck(True, chance_percent=capture_chance_percent(params, color))


def capture_phase(state: GameState, params: GameParams) -> CapturePhase:
    """Wylicza fazę maszyny stanów z aktualnego snapshotu."""
    if state.is_charging:
        return CapturePhase.CHARGING
    if state.flash is not None:
        if state.flash.kind is FlashKind.SUCCESS:
            return CapturePhase.RESOLVING_SUCCESS
        return CapturePhase.RESOLVING_FAILURE
    if state.capture_cooldown_ticks_remaining > 0:
        return CapturePhase.COOLDOWN
    return CapturePhase.IDLE


def is_charge_complete(state: GameState, params: GameParams) -> bool:
    """True jeśli ładowanie trwa co najmniej hold_duration ticków."""
    if state.capture_charge_start_tick is None:
        return False
    return state.tick - state.capture_charge_start_tick >= hold_duration_ticks(state, params)


def preview_capture_chance(state: GameState, params: GameParams) -> Optional[int]:
    """Szansa dla pola focus lub None, gdy przechwycenie nie jest możliwe."""
    return can_capture(state, params).chance_percent


def is_carry_flicker_on(state: GameState, params: GameParams) -> bool:
    """
    Czy przenoszony kolor jest w fazie "widoczny" cyklu migania.

    Czysto prezentacyjna pomoc - logika gry z niej nie korzysta.
    """
    if not state.is_carrying:
        return False
    cycle = params.carry_flicker_cycle_ticks
    if cycle <= 0:
        return False
    return state.tick % cycle < int(cycle * params.carry_flicker_on_fraction)


# ═══════════════════════════════════════════════════════════════════════════
# TRYB AKCJI
# ═══════════════════════════════════════════════════════════════════════════

def start_action_mode(state: GameState, params: GameParams) -> GameState:
    """
    Wejście w tryb akcji (wciśnięcie przycisku).

    Odrzucane (stan bez zmian) podczas cooldownu i gdy tryb akcji już
    trwa. Jeśli focus jest poprawnym celem - startuje ładowanie.
    """
    if state.capture_cooldown_ticks_remaining > 0 or state.is_action_mode:
        return state

    charge_start = state.tick if can_capture(state, params).allowed else None
    return state.evolve(is_action_mode=True, capture_charge_start_tick=charge_start)


def end_action_mode(state: GameState) -> GameState:
    """
    Wyjście z trybu akcji (puszczenie przycisku).

    Przerwane ładowanie jest anulowane bez cooldownu i bez flasha.
    """
    if not state.is_action_mode and not state.is_charging:
        return state
    return state.evolve(is_action_mode=False, capture_charge_start_tick=None)


def resolve_capture(state: GameState, params: GameParams, roll: float) -> GameState:
    """
    Rozstrzyga zakończone ładowanie.

    Args:
        state: Snapshot z trwającym ładowaniem
        params: Parametry gry
        roll: Wartość z [0, 1) - JEDNO losowanie z GameRNG

    Returns:
        GameState: Stan po sukcesie, porażce albo anulowaniu

    Note:
        Jeśli cel przestał być poprawny (np. pole wyczyszczone w trakcie),
        ładowanie jest anulowane bez kary.
    """
    ended = state.evolve(is_action_mode=False, capture_charge_start_tick=None)

    check = can_capture(state, params)
    if not check.allowed:
        return ended

    if roll < check.chance_percent / 100:
        color = state.focus_color()
        grid = state.active_grid.set_cell(state.focus, None)
        return ended.with_active_grid(grid).evolve(
            carried_color=color,
            flash=Flash(FlashKind.SUCCESS, state.tick),
        )

    return ended.evolve(
        flash=Flash(FlashKind.FAILURE, state.tick),
        capture_cooldown_ticks_remaining=params.capture_failure_cooldown_ticks,
    )


# ═══════════════════════════════════════════════════════════════════════════
# UPUSZCZANIE I FLASH
# ═══════════════════════════════════════════════════════════════════════════

def can_drop(state: GameState) -> CaptureCheck:
    """Sprawdza czy przenoszony kolor można odłożyć na pole protagonisty."""
    if not state.is_carrying:
        return CaptureCheck(False, CaptureRejection.NOT_CARRYING)
    if state.active_grid.is_colored(state.protagonist):
        return CaptureCheck(False, CaptureRejection.BLOCKED_BY_COLOR)
    return CaptureCheck(True)


def drop_carried(state: GameState, params: GameParams) -> GameState:
    """
    Odkłada przenoszony kolor na pole protagonisty (aktywna siatka).

    Cooldown = max(aktualny, drop_cooldown_ticks). Odrzucane gdy pole
    jest już kolorowe - kolor nigdy nie znika.
    """
    if not can_drop(state).allowed:
        return state

    grid = state.active_grid.set_cell(state.protagonist, state.carried_color)
    return state.with_active_grid(grid).evolve(
        carried_color=None,
        capture_cooldown_ticks_remaining=max(
            state.capture_cooldown_ticks_remaining, params.drop_cooldown_ticks
        ),
    )


def clear_expired_flash(state: GameState, params: GameParams, at_tick: int) -> GameState:
    """Usuwa flash, gdy at_tick - started_tick >= capture_flash_duration_ticks."""
    if state.flash is None:
        return state
    if at_tick - state.flash.started_tick >= params.capture_flash_duration_ticks:
        return state.evolve(flash=None)
    return state
