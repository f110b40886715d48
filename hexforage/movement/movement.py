"""
System ruchu protagonisty i kierowania focusem.

Protagonista stoi na polu aktywnej siatki i patrzy w jednym
z 6 kierunków. Focus (kursor akcji) to ZAWSZE sąsiednie pole w kierunku
patrzenia:

    focus = protagonist + HEX_DIRECTIONS[facing_direction]

Dlatego po każdej zmianie pozycji lub kierunku focus jest wyliczany
od nowa (update_focus_position) - nigdy nie jest ustawiany ręcznie.

RODZAJE RUCHU:
═══════════════════════════════════════════════════════════════════

    Obrót (set_facing / rotate_facing / move_focus_delta)
    ─────────────────────────────────────────────────────────────
    Zmienia tylko kierunek patrzenia. Działa od razu.

    Krok (queue_step)
    ─────────────────────────────────────────────────────────────
    Jeden krok na sąsiednie pole, wykonywany w najbliższym ticku.

    Auto-ruch (start_auto_move)
    ─────────────────────────────────────────────────────────────
    Gracz wskazuje pole docelowe. Protagonista idzie (A*) na sąsiada
    tego pola i na końcu obraca się w jego stronę - wskazane pole
    staje się focusem. Krok co auto_move_step_ticks ticków.

BLOKADY (can_move):
═══════════════════════════════════════════════════════════════════

    out_of_bounds     Cel poza aktywną siatką
    blocked_by_color  Protagonista niesie kolor, a cel jest kolorowy
                      (gdy carrying_move_requires_empty)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from ..core.hex_coord import HexCoord, HEX_DIRECTIONS, ORIGIN
from ..core.params import GameParams
from ..core.pathfinding import colored_obstacles, find_path, find_path_next_step
from ..state.game_state import GameState, ActiveField


class MoveRejection(Enum):
    """Powód odrzucenia ruchu."""
    OUT_OF_BOUNDS = "out_of_bounds"
    BLOCKED_BY_COLOR = "blocked_by_color"


@dataclass(frozen=True)
class MoveCheck:
    """
    Wynik sprawdzenia ruchu.

    Attributes:
        allowed (bool): Czy ruch jest możliwy
        reason (Optional[MoveRejection]): Powód odrzucenia
    """
    allowed: bool
    reason: Optional[MoveRejection] = None


# ═══════════════════════════════════════════════════════════════════════════
# WALIDACJA
# ═══════════════════════════════════════════════════════════════════════════

def movement_obstacles(state: GameState, params: GameParams) -> Set[HexCoord]:
    """Pola zablokowane dla protagonisty (kolorowe, tylko przy przenoszeniu)."""
    if state.is_carrying and params.carrying_move_requires_empty:
        return colored_obstacles(state.active_grid)
    return set()


def can_move(state: GameState, params: GameParams, target: HexCoord) -> MoveCheck:
    """
    Sprawdza czy protagonista może stanąć na polu target.

    Returns:
        MoveCheck: allowed albo powód (out_of_bounds / blocked_by_color)
    """
    grid = state.active_grid
    if not grid.contains(target):
        return MoveCheck(False, MoveRejection.OUT_OF_BOUNDS)
    if state.is_carrying and params.carrying_move_requires_empty and grid.is_colored(target):
        return MoveCheck(False, MoveRejection.BLOCKED_BY_COLOR)
    return MoveCheck(True)


# ═══════════════════════════════════════════════════════════════════════════
# KIERUNEK I FOCUS
# ═══════════════════════════════════════════════════════════════════════════

def update_focus_position(state: GameState) -> GameState:
    """Wylicza focus z pozycji i kierunku protagonisty."""
    focus = state.protagonist.neighbor(state.facing_direction)
    if focus == state.focus:
        return state
    return state.evolve(focus=focus)


def set_facing(state: GameState, direction: int) -> GameState:
    """
    Ustawia kierunek patrzenia (normalizowany mod 6).

    Ignorowane podczas auto-ruchu.
    """
    if state.is_auto_moving:
        return state
    return update_focus_position(state.evolve(facing_direction=direction % 6))


def rotate_facing(state: GameState, steps: int) -> GameState:
    """Obraca kierunek o steps × 60° (ujemne = przeciwnie do zegara)."""
    return set_facing(state, state.facing_direction + steps)


def move_focus_delta(state: GameState, dq: int, dr: int) -> GameState:
    """
    Obraca protagonistę w kierunku wektora (dq, dr).

    (dq, dr) musi być jednym z sześciu wektorów jednostkowych
    HEX_DIRECTIONS - wtedy kierunek patrzenia = jego indeks.
    Inne wektory (np. (0, 0) czy (1, 1)) to no-op.
    """
    if state.is_auto_moving:
        return state
    if (dq, dr) not in HEX_DIRECTIONS:
        return state
    return set_facing(state, HEX_DIRECTIONS.index((dq, dr)))


# ═══════════════════════════════════════════════════════════════════════════
# RUCH
# ═══════════════════════════════════════════════════════════════════════════

def apply_move(state: GameState, params: GameParams, target: HexCoord) -> GameState:
    """
    Przenosi protagonistę na target (po walidacji can_move).

    Ruch o jedno pole ustawia też kierunek patrzenia na kierunek ruchu.
    Przenoszony kolor podróżuje razem z protagonistą.
    """
    if not can_move(state, params, target).allowed:
        return state

    direction = state.protagonist.direction_to(target)
    facing = state.facing_direction if direction is None else direction
    return update_focus_position(state.evolve(protagonist=target, facing_direction=facing))


def queue_step(state: GameState, direction: int) -> GameState:
    """Kolejkuje pojedynczy krok na najbliższy tick (przerywa auto-ruch)."""
    return state.evolve(
        pending_step=direction % 6,
        auto_move_target=None,
        auto_focus_target=None,
        auto_move_ticks_remaining=0,
    )


def apply_pending_step(state: GameState, params: GameParams) -> GameState:
    """Wykonuje zakolejkowany krok (odrzucony krok jest po prostu zdejmowany)."""
    if state.pending_step is None:
        return state
    target = state.protagonist.neighbor(state.pending_step)
    return apply_move(state.evolve(pending_step=None), params, target)


# ═══════════════════════════════════════════════════════════════════════════
# AUTO-RUCH
# ═══════════════════════════════════════════════════════════════════════════

def start_auto_move(state: GameState, params: GameParams, target: HexCoord) -> GameState:
    """
    Rozpoczyna auto-ruch tak, by target stał się focusem.

    Protagonista wybiera najbliższego (wg dystansu hex) dostępnego sąsiada
    targetu. Przy remisie wygrywa niższy indeks kierunku.

    Args:
        state: Aktualny stan
        params: Parametry gry
        target: Pole, które ma zostać focusem

    Returns:
        GameState: Stan z ustawionym auto_move_target; no-op gdy target
                   jest poza siatką albo nie ma dostępnego sąsiada
    """
    if not state.active_grid.contains(target):
        return state

    best: Optional[HexCoord] = None
    best_dist = None
    for neighbor in target.neighbors():
        if not can_move(state, params, neighbor).allowed and neighbor != state.protagonist:
            continue
        dist = state.protagonist.distance(neighbor)
        if best_dist is None or dist < best_dist:
            best, best_dist = neighbor, dist

    if best is None:
        return state

    if best == state.protagonist:
        facing = state.protagonist.direction_to(target)
        return update_focus_position(state.evolve(
            facing_direction=facing,
            auto_move_target=None,
            auto_focus_target=None,
            auto_move_ticks_remaining=0,
            pending_step=None,
        ))

    return state.evolve(
        auto_move_target=best,
        auto_focus_target=target,
        auto_move_ticks_remaining=0,
        pending_step=None,
    )


def cancel_auto_move(state: GameState) -> GameState:
    """Przerywa auto-ruch (protagonista zostaje tam, gdzie jest)."""
    if not state.is_auto_moving:
        return state
    return state.evolve(auto_move_target=None, auto_focus_target=None, auto_move_ticks_remaining=0)


def _arrive(state: GameState) -> GameState:
    facing = state.facing_direction
    if state.auto_focus_target is not None:
        direction = state.protagonist.direction_to(state.auto_focus_target)
        if direction is not None:
            facing = direction
    return update_focus_position(state.evolve(
        facing_direction=facing,
        auto_move_target=None,
        auto_focus_target=None,
        auto_move_ticks_remaining=0,
    ))


def step_auto_move(state: GameState, params: GameParams) -> GameState:
    """
    Jeden tick auto-ruchu.

    - Odlicza auto_move_ticks_remaining do 0
    - Na 0 wykonuje krok A* (trasa liczona od nowa, przeszkody z
      movement_obstacles) i ustawia licznik na auto_move_step_ticks - 1
    - Po dotarciu obraca się na auto_focus_target i kończy
    - Brak trasy lub zablokowany krok przerywa auto-ruch
    """
    if not state.is_auto_moving:
        return state

    if state.auto_move_ticks_remaining > 0:
        return state.evolve(auto_move_ticks_remaining=state.auto_move_ticks_remaining - 1)

    if state.protagonist == state.auto_move_target:
        return _arrive(state)

    next_pos = find_path_next_step(
        state.active_grid,
        state.protagonist,
        state.auto_move_target,
        movement_obstacles(state, params),
    )
    if next_pos is None or not can_move(state, params, next_pos).allowed:
        return cancel_auto_move(state)

    moved = apply_move(state, params, next_pos).evolve(
        auto_move_ticks_remaining=params.auto_move_step_ticks - 1,
    )
    if moved.protagonist == moved.auto_move_target:
        return _arrive(moved)
    return moved


def compute_breadcrumbs(state: GameState, params: GameParams) -> List[HexCoord]:
    """
    Pozostała trasa auto-ruchu (bez pola startowego).

    Returns:
        List[HexCoord]: Kolejne pola do celu; [] gdy brak auto-ruchu
    """
    if not state.is_auto_moving:
        return []
    path = find_path(
        state.active_grid,
        state.protagonist,
        state.auto_move_target,
        movement_obstacles(state, params),
    )
    return path[1:]


# ═══════════════════════════════════════════════════════════════════════════
# PRZEŁĄCZANIE SIATKI
# ═══════════════════════════════════════════════════════════════════════════

def toggle_active_field(state: GameState) -> GameState:
    """
    Przełącza aktywną siatkę między światem a inwentarzem.

    Wejście do inwentarza zapamiętuje pozycję i kierunek w świecie
    i stawia protagonistę w (0, 0) inwentarza. Wyjście je przywraca.
    Odrzucane podczas przenoszenia, ładowania i auto-ruchu.
    """
    if state.is_carrying or state.is_charging or state.is_auto_moving:
        return state

    if state.in_inventory:
        restored = state.evolve(
            active_field=ActiveField.WORLD,
            protagonist=state.world_position or ORIGIN,
            facing_direction=state.world_facing,
            world_position=None,
            world_facing=0,
            pending_step=None,
            is_action_mode=False,
        )
        return update_focus_position(restored)

    entered = state.evolve(
        active_field=ActiveField.INVENTORY,
        world_position=state.protagonist,
        world_facing=state.facing_direction,
        protagonist=ORIGIN,
        facing_direction=0,
        pending_step=None,
        is_action_mode=False,
    )
    return update_focus_position(entered)
