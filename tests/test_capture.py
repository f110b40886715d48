"""
Testy dla maszyny stanów przechwycenia.

Testuje:
- Szansę przechwycenia zależną od dystansu palety
- Kolejność powodów odrzucenia can_capture
- Start / koniec trybu akcji i rozstrzygnięcie (sukces / porażka)
- Upuszczanie przenoszonego koloru
- Fazy wyliczane ze snapshotu, flash, miganie ładunku
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexforage.core.hex_coord import HexCoord, ORIGIN
from hexforage.core.hex_grid import HexGrid
from hexforage.core.params import GameParams
from hexforage.state.game_state import (
    ActiveField,
    Flash,
    FlashKind,
    GameState,
    total_color_count,
)
from hexforage.capture.capture import (
    CapturePhase,
    CaptureRejection,
    can_capture,
    can_drop,
    capture_chance_percent,
    capture_phase,
    clear_expired_flash,
    drop_carried,
    end_action_mode,
    hold_duration_ticks,
    is_carry_flicker_on,
    is_charge_complete,
    palette_distance,
    preview_capture_chance,
    resolve_capture,
    start_action_mode,
)


FOCUS = HexCoord(0, -1)


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def params():
    return GameParams()


def make_state(focus_color=None, **changes):
    """Pusty świat R=5, protagonista w (0, 0) patrzy w górę na (0, -1)."""
    grid = HexGrid.create_empty(5)
    if focus_color is not None:
        grid = grid.set_cell(FOCUS, focus_color)
    fields = {
        "grid": grid,
        "inventory_grid": HexGrid.create_empty(3),
        "remaining_seconds": 300,
    }
    fields.update(changes)
    return GameState(**fields)


@pytest.fixture
def target_state():
    """Focus ma kolor 2 (szansa 60%)."""
    return make_state(focus_color=2)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SZANSA
# ═══════════════════════════════════════════════════════════════════════════

def test_palette_distance_wraps():
    assert palette_distance(0, 7, 8) == 1
    assert palette_distance(0, 4, 8) == 4
    assert palette_distance(6, 1, 8) == 3
    assert palette_distance(3, 3, 8) == 0


@pytest.mark.parametrize("color,expected", [
    (0, 100), (1, 80), (2, 60), (3, 40), (4, 10), (5, 40), (6, 60), (7, 80),
])
def test_chance_anchors(params, color, expected):
    """Domyślnie 100 / 80 / 60 / 40 / 10 dla dystansu 0..4."""
    assert capture_chance_percent(params, color) == expected


def test_chance_is_monotonic(params):
    chances = [capture_chance_percent(params, c) for c in range(5)]
    assert chances == sorted(chances, reverse=True)


def test_chance_respects_base_index(params):
    assert capture_chance_percent(params, 3, base_index=3) == 100
    assert capture_chance_percent(params, 7, base_index=3) == 10


def test_chance_min_floor():
    """Kara nie schodzi poniżej chance_min_percent."""
    params = GameParams(chance_penalty_per_palette_distance=60, chance_min_percent=25)
    assert capture_chance_percent(params, 1) == 40
    assert capture_chance_percent(params, 2) == 25
    assert capture_chance_percent(params, 3) == 25


# ═══════════════════════════════════════════════════════════════════════════
# TEST: CAN CAPTURE
# ═══════════════════════════════════════════════════════════════════════════

def test_can_capture_allowed(target_state, params):
    check = can_capture(target_state, params)

    assert check.allowed
    assert check.reason is None
    assert check.chance_percent == 60


def test_rejection_already_carrying_wins(params):
    state = make_state(focus_color=None, carried_color=1, capture_cooldown_ticks_remaining=5)
    assert can_capture(state, params).reason is CaptureRejection.ALREADY_CARRYING


def test_rejection_on_cooldown_before_target_empty(params):
    state = make_state(focus_color=None, capture_cooldown_ticks_remaining=5)
    assert can_capture(state, params).reason is CaptureRejection.ON_COOLDOWN


def test_rejection_target_empty(params):
    assert can_capture(make_state(), params).reason is CaptureRejection.TARGET_EMPTY


def test_rejection_target_off_grid(params):
    """Focus poza siatką traktujemy jak puste pole."""
    state = make_state(protagonist=HexCoord(0, -5), focus=HexCoord(0, -6))
    assert can_capture(state, params).reason is CaptureRejection.TARGET_EMPTY


def test_rejection_not_adjacent(params):
    state = make_state(focus_color=2, focus=FOCUS, protagonist=HexCoord(0, 2))
    assert can_capture(state, params).reason is CaptureRejection.NOT_ADJACENT


def test_inventory_capture_always_100(params):
    inventory = HexGrid.create_empty(3).set_cell(FOCUS, 4)
    state = make_state(inventory_grid=inventory, active_field=ActiveField.INVENTORY)

    assert can_capture(state, params).chance_percent == 100
    assert hold_duration_ticks(state, params) == 1


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TRYB AKCJI
# ═══════════════════════════════════════════════════════════════════════════

def test_start_action_mode_starts_charge(target_state, params):
    state = start_action_mode(target_state.evolve(tick=40), params)

    assert state.is_action_mode
    assert state.capture_charge_start_tick == 40
    assert capture_phase(state, params) is CapturePhase.CHARGING


def test_start_action_mode_on_empty_focus_has_no_charge(params):
    state = start_action_mode(make_state(), params)

    assert state.is_action_mode
    assert state.capture_charge_start_tick is None


def test_start_action_mode_refused_on_cooldown(target_state, params):
    cooling = target_state.evolve(capture_cooldown_ticks_remaining=3)
    assert start_action_mode(cooling, params) is cooling


def test_start_action_mode_refused_when_already_active(target_state, params):
    active = start_action_mode(target_state, params)
    assert start_action_mode(active, params) is active


def test_end_action_mode_cancels_without_penalty(target_state, params):
    charging = start_action_mode(target_state, params)
    ended = end_action_mode(charging)

    assert not ended.is_action_mode
    assert ended.capture_charge_start_tick is None
    assert ended.capture_cooldown_ticks_remaining == 0
    assert ended.flash is None
    assert ended.grid is target_state.grid


def test_end_action_mode_idle_is_noop(params):
    state = make_state()
    assert end_action_mode(state) is state


def test_is_charge_complete(target_state, params):
    charging = start_action_mode(target_state, params)

    assert not is_charge_complete(charging.evolve(tick=5), params)
    assert is_charge_complete(charging.evolve(tick=6), params)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ROZSTRZYGNIĘCIE
# ═══════════════════════════════════════════════════════════════════════════

def test_resolve_success(target_state, params):
    charging = start_action_mode(target_state, params).evolve(tick=6)
    state = resolve_capture(charging, params, roll=0.59)

    assert state.carried_color == 2
    assert state.carried_cell == ORIGIN
    assert state.grid.is_empty(FOCUS)
    assert state.flash == Flash(FlashKind.SUCCESS, 6)
    assert state.capture_cooldown_ticks_remaining == 0
    assert not state.is_action_mode
    assert not state.is_charging
    assert total_color_count(state) == total_color_count(target_state)


def test_resolve_failure(target_state, params):
    charging = start_action_mode(target_state, params).evolve(tick=6)
    state = resolve_capture(charging, params, roll=0.60)

    assert state.carried_color is None
    assert state.grid is target_state.grid
    assert state.flash == Flash(FlashKind.FAILURE, 6)
    assert state.capture_cooldown_ticks_remaining == params.capture_failure_cooldown_ticks
    assert capture_phase(state, params) is CapturePhase.RESOLVING_FAILURE


def test_resolve_when_target_vanished_cancels(target_state, params):
    charging = start_action_mode(target_state, params)
    vanished = charging.evolve(grid=charging.grid.set_cell(FOCUS, None))
    state = resolve_capture(vanished, params, roll=0.0)

    assert not state.is_charging
    assert state.flash is None
    assert state.carried_color is None


def test_preview_capture_chance(target_state, params):
    assert preview_capture_chance(target_state, params) == 60
    assert preview_capture_chance(make_state(), params) is None


# ═══════════════════════════════════════════════════════════════════════════
# TEST: UPUSZCZANIE
# ═══════════════════════════════════════════════════════════════════════════

def test_drop_on_empty_cell(params):
    state = make_state(carried_color=3, capture_cooldown_ticks_remaining=2)
    dropped = drop_carried(state, params)

    assert dropped.carried_color is None
    assert dropped.grid.color_at(ORIGIN) == 3
    assert dropped.capture_cooldown_ticks_remaining == params.drop_cooldown_ticks
    assert total_color_count(dropped) == total_color_count(state)


def test_drop_keeps_longer_cooldown(params):
    state = make_state(carried_color=3, capture_cooldown_ticks_remaining=10)
    assert drop_carried(state, params).capture_cooldown_ticks_remaining == 10


def test_drop_refused_on_colored_cell(params):
    grid = HexGrid.create_empty(5).set_cell(ORIGIN, 6)
    state = make_state(carried_color=3).evolve(grid=grid)

    assert can_drop(state).reason is CaptureRejection.BLOCKED_BY_COLOR
    assert drop_carried(state, params) is state


def test_drop_without_carry(params):
    state = make_state()
    assert can_drop(state).reason is CaptureRejection.NOT_CARRYING
    assert drop_carried(state, params) is state


# ═══════════════════════════════════════════════════════════════════════════
# TEST: FAZY I FLASH
# ═══════════════════════════════════════════════════════════════════════════

def test_phase_idle_and_cooldown(params):
    assert capture_phase(make_state(), params) is CapturePhase.IDLE
    cooling = make_state(capture_cooldown_ticks_remaining=4)
    assert capture_phase(cooling, params) is CapturePhase.COOLDOWN


def test_phase_success_flash(params):
    state = make_state(flash=Flash(FlashKind.SUCCESS, 3))
    assert capture_phase(state, params) is CapturePhase.RESOLVING_SUCCESS


def test_clear_expired_flash(params):
    state = make_state(flash=Flash(FlashKind.SUCCESS, 10))

    assert clear_expired_flash(state, params, 11) is state
    assert clear_expired_flash(state, params, 12).flash is None


def test_carry_flicker(params):
    carrying = make_state(carried_color=1)

    on = [is_carry_flicker_on(carrying.evolve(tick=t), params) for t in range(6)]
    assert on == [True, True, True, False, False, False]
    assert not is_carry_flicker_on(make_state(), params)
