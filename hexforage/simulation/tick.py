"""
Funkcja ticka - jedyny sposób na upływ czasu w grze.

Tick jest czystą funkcją: (stan, parametry, rng) -> nowy stan.
Zewnętrzny driver (pętla gry, API, testy) woła go raz na klatkę
logiczną (domyślnie 12 razy na sekundę gry).

PĘTLA TICKA:
═══════════════════════════════════════════════════════════════════

    next_tick = tick + 1

    1. RESOLVE_CAPTURE
       ─────────────────────────────────────────────────────────
       • Tryb akcji + trwa ładowanie + ładowanie zakończone
         -> JEDNO losowanie rng.random(), resolve_capture

    2. COOLDOWN
       ─────────────────────────────────────────────────────────
       • capture_cooldown_ticks_remaining -= 1 (min 0)

    3. FLASH
       ─────────────────────────────────────────────────────────
       • Usuń flash gdy next_tick - started_tick >= flash_duration

    4. TIMER
       ─────────────────────────────────────────────────────────
       • next_tick % game_tick_rate == 0 i remaining_seconds > 0
         -> remaining_seconds -= 1

    5. MOVEMENT
       ─────────────────────────────────────────────────────────
       • Zakolejkowany krok gracza (pending_step) ALBO
       • Krok auto-ruchu (A*, co auto_move_step_ticks)
       • Focus wyliczany od nowa

    6. ADVANCE
       ─────────────────────────────────────────────────────────
       • tick = next_tick

DETERMINIZM:
═══════════════════════════════════════════════════════════════════

    • rng jest używany WYŁĄCZNIE w kroku 1 (jedno losowanie na próbę)
    • Ten sam seed + te same komendy = identyczne snapshoty

Przykład:
    >>> state = tick(state, params, rng)          # jeden tick
    >>> state = tick(state, params, rng, steps=12)  # sekunda gry
"""

from __future__ import annotations

from ..core.params import GameParams
from ..core.rng import GameRNG
from ..state.game_state import GameState
from ..capture.capture import (
    is_charge_complete,
    resolve_capture,
    clear_expired_flash,
)
from ..movement.movement import (
    apply_pending_step,
    step_auto_move,
    update_focus_position,
)


def tick(state: GameState, params: GameParams, rng: GameRNG, steps: int = 1) -> GameState:
    """
    Przesuwa symulację o steps ticków.

    Args:
        state: Aktualny snapshot
        params: Parametry gry
        rng: Generator sesji (zużywany tylko przy rozstrzyganiu przechwycenia)
        steps: Liczba ticków (<= 0 -> stan bez zmian)

    Returns:
        GameState: Snapshot z tick = state.tick + max(0, steps)
    """
    for _ in range(max(0, steps)):
        state = _single_tick(state, params, rng)
    return state


def _single_tick(state: GameState, params: GameParams, rng: GameRNG) -> GameState:
    next_tick = state.tick + 1

    # 1. Rozstrzygnięcie ładowania
    if state.is_action_mode and state.is_charging and is_charge_complete(state, params):
        state = resolve_capture(state, params, rng.random())

    # 2. Cooldown
    if state.capture_cooldown_ticks_remaining > 0:
        state = state.evolve(capture_cooldown_ticks_remaining=state.capture_cooldown_ticks_remaining - 1)

    # 3. Flash
    state = clear_expired_flash(state, params, next_tick)

    # 4. Licznik
    if next_tick % params.game_tick_rate == 0 and state.remaining_seconds > 0:
        state = state.evolve(remaining_seconds=state.remaining_seconds - 1)

    # 5. Ruch
    if state.pending_step is not None:
        state = apply_pending_step(state, params)
    elif state.is_auto_moving:
        state = step_auto_move(state, params)
    state = update_focus_position(state)

    # 6. Czas
    return state.evolve(tick=next_tick)
