"""
Testy dla komend gry i reducera apply_command.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexforage.core.hex_coord import HexCoord
from hexforage.core.hex_grid import HexGrid
from hexforage.core.params import GameParams
from hexforage.core.rng import GameRNG
from hexforage.state.game_state import ActiveField, GameState, total_color_count
from hexforage.simulation.commands import (
    AUTHORING_COMMANDS,
    COMMAND_HANDLERS,
    CommandType,
    GameCommand,
    apply_command,
)


FOCUS = HexCoord(0, -1)


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def params():
    return GameParams()


@pytest.fixture
def rng():
    return GameRNG(12345)


@pytest.fixture
def state():
    grid = HexGrid.create_empty(5).set_cell(FOCUS, 2)
    return GameState(grid=grid, inventory_grid=HexGrid.create_empty(3), remaining_seconds=300)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PARSOWANIE
# ═══════════════════════════════════════════════════════════════════════════

def test_from_dict_basic():
    command = GameCommand.from_dict({"type": "move_to", "q": 2, "r": -1})

    assert command.type is CommandType.MOVE_TO
    assert command.coord == HexCoord(2, -1)


def test_from_dict_ignores_extra_keys():
    command = GameCommand.from_dict({"type": "tick", "steps": 12, "source": "keyboard"})
    assert command == GameCommand(CommandType.TICK, steps=12)


@pytest.mark.parametrize("payload", [{"type": "teleport"}, {}, {"type": None}])
def test_from_dict_unknown_type_raises(payload):
    with pytest.raises(ValueError):
        GameCommand.from_dict(payload)


def test_to_dict_omits_defaults():
    assert GameCommand(CommandType.START_ACTION).to_dict() == {"type": "start_action"}
    assert GameCommand(CommandType.SET_CELL, q=1, r=0, color=3).to_dict() == {
        "type": "set_cell", "q": 1, "r": 0, "color": 3,
    }


def test_every_command_has_handler():
    assert set(COMMAND_HANDLERS) == set(CommandType)
    assert AUTHORING_COMMANDS == {CommandType.SET_CELL, CommandType.SET_HOTBAR_SLOT}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: APPLY
# ═══════════════════════════════════════════════════════════════════════════

def test_apply_tick(state, params, rng):
    result = apply_command(state, params, GameCommand(CommandType.TICK, steps=12), rng)
    assert result.tick == 12
    assert result.remaining_seconds == 299


def test_apply_direction(state, params, rng):
    result = apply_command(state, params, GameCommand(CommandType.MOVE_FOCUS_DIRECTION, direction=2), rng)
    assert result.focus == HexCoord(1, 0)


def test_apply_delta(state, params, rng):
    result = apply_command(state, params, GameCommand(CommandType.MOVE_FOCUS_DELTA, dq=-1, dr=1), rng)
    assert result.facing_direction == 4
    assert result.focus == HexCoord(-1, 1)


def test_missing_fields_are_noop(state, params, rng):
    for command_type in (
        CommandType.MOVE_FOCUS_DIRECTION,
        CommandType.STEP,
        CommandType.MOVE_TO,
        CommandType.SELECT_SLOT,
        CommandType.EXCHANGE_SLOT,
        CommandType.SET_CELL,
        CommandType.SET_HOTBAR_SLOT,
    ):
        assert apply_command(state, params, GameCommand(command_type), rng) is state


def test_apply_press_action_eats(state, params, rng):
    result = apply_command(state, params, GameCommand(CommandType.PRESS_ACTION), rng)

    assert result.hotbar[0] == 2
    assert total_color_count(result) == total_color_count(state)


def test_apply_exchange_out_of_range(state, params, rng):
    result = apply_command(state, params, GameCommand(CommandType.EXCHANGE_SLOT, index=10), rng)
    assert result is state


def test_apply_start_and_end_action(state, params, rng):
    started = apply_command(state, params, GameCommand(CommandType.START_ACTION), rng)
    assert started.is_charging

    ended = apply_command(started, params, GameCommand(CommandType.END_ACTION), rng)
    assert not ended.is_charging
    assert not ended.is_action_mode


def test_apply_set_cell_validates_color(state, params, rng):
    valid = apply_command(state, params, GameCommand(CommandType.SET_CELL, q=3, r=0, color=7), rng)
    invalid = apply_command(state, params, GameCommand(CommandType.SET_CELL, q=3, r=0, color=8), rng)
    cleared = apply_command(state, params, GameCommand(CommandType.SET_CELL, q=0, r=-1), rng)

    assert valid.grid.color_at(HexCoord(3, 0)) == 7
    assert invalid is state
    assert cleared.grid.is_empty(FOCUS)


def test_apply_set_hotbar_slot(state, params, rng):
    result = apply_command(state, params, GameCommand(CommandType.SET_HOTBAR_SLOT, index=5, color=1), rng)
    assert result.hotbar[5] == 1
    assert apply_command(state, params, GameCommand(CommandType.SET_HOTBAR_SLOT, index=5, color=-1), rng) is state


def test_apply_toggle_inventory(state, params, rng):
    result = apply_command(state, params, GameCommand(CommandType.TOGGLE_INVENTORY), rng)
    assert result.active_field is ActiveField.INVENTORY


def test_apply_move_to_and_cancel(state, params, rng):
    moving = apply_command(state, params, GameCommand(CommandType.MOVE_TO, q=3, r=2), rng)
    assert moving.is_auto_moving

    stopped = apply_command(moving, params, GameCommand(CommandType.CANCEL_AUTO_MOVE), rng)
    assert not stopped.is_auto_moving


def test_apply_is_pure(state, params, rng):
    """Reducer nie modyfikuje wejściowego snapshotu."""
    snapshot = state
    apply_command(state, params, GameCommand(CommandType.EAT), rng)

    assert state is snapshot
    assert state.grid.color_at(FOCUS) == 2
    assert state.hotbar == (None,) * 6
