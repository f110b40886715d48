"""
Testy dla GameSession i integracji platformy.

Testuje:
- Rejestr integracji (null / event_log)
- Kolejność hooków przy start / pause / resume / stop
- Ignorowanie ticków poza stanem RUNNING
- Automatyczne zakończenie sesji po upływie licznika
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexforage.core.params import GameParams, SessionConfig
from hexforage.events.event_logger import EventType
from hexforage.platform.integration import (
    INTEGRATION_REGISTRY,
    EventLogIntegration,
    NullIntegration,
    PlatformIntegration,
    get_integration,
)
from hexforage.simulation.commands import CommandType, GameCommand
from hexforage.simulation.engine import GameEngine
from hexforage.simulation.session import GameSession, SessionStatus


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def params():
    return GameParams(initial_color_probability=0.0, timer_initial_seconds=10)


@pytest.fixture
def session(params):
    """Sesja z integracją zapisującą hooki."""
    return GameSession(GameEngine(params, seed=1), EventLogIntegration())


# ═══════════════════════════════════════════════════════════════════════════
# TEST: REJESTR
# ═══════════════════════════════════════════════════════════════════════════

def test_registry_is_closed():
    assert set(INTEGRATION_REGISTRY) == {"null", "event_log"}


def test_get_integration():
    assert isinstance(get_integration("null"), NullIntegration)
    assert isinstance(get_integration("EVENT_LOG"), EventLogIntegration)


def test_get_integration_unknown_raises():
    with pytest.raises(ValueError):
        get_integration("steam")


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        PlatformIntegration()


def test_init_is_idempotent():
    integration = EventLogIntegration()
    integration.init()
    integration.init()

    assert integration.calls == ["init"]
    assert integration.is_initialized


# ═══════════════════════════════════════════════════════════════════════════
# TEST: CYKL ŻYCIA
# ═══════════════════════════════════════════════════════════════════════════

def test_start_hooks_order(session):
    session.start()

    assert session.status is SessionStatus.RUNNING
    assert session.integration.calls == ["init", "game_ready", "gameplay_start"]


def test_pause_resume_hooks(session):
    session.start()
    session.pause()
    session.resume()

    assert session.integration.calls[3:] == ["pause", "gameplay_stop", "resume", "gameplay_start"]
    assert session.is_running


def test_stop_hooks_and_summary(session):
    session.start()
    session.advance(3)
    summary = session.stop()

    assert session.status is SessionStatus.STOPPED
    assert session.integration.calls[-1] == "gameplay_stop"
    assert summary["tick"] == 3


def test_stop_from_paused_does_not_repeat_gameplay_stop(session):
    session.start()
    session.pause()
    session.stop()

    assert session.integration.calls.count("gameplay_stop") == 1


def test_hooks_go_to_engine_log(session):
    session.start()

    hooks = session.engine.logger.get_events_by_type(EventType.PLATFORM_HOOK)
    assert [e.data["hook"] for e in hooks] == ["init", "game_ready", "gameplay_start"]


def test_null_integration_session(params):
    session = GameSession(GameEngine(params, seed=1))
    session.start()
    session.advance(2)

    assert session.integration.name == "null"
    assert session.engine.tick == 2


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WEJŚCIE
# ═══════════════════════════════════════════════════════════════════════════

def test_advance_ignored_before_start(session):
    session.advance(5)
    assert session.engine.tick == 0


def test_advance_ignored_while_paused_but_commands_work(session):
    session.start()
    session.pause()
    session.advance(5)
    session.execute(GameCommand(CommandType.MOVE_FOCUS_DIRECTION, direction=2))

    assert session.engine.tick == 0
    assert session.engine.facing_direction == 2


def test_tick_command_respects_status(session):
    session.execute(GameCommand(CommandType.TICK, steps=4))
    assert session.engine.tick == 0

    session.start()
    session.execute_dict({"type": "tick", "steps": 4})
    assert session.engine.tick == 4


def test_session_stops_when_time_is_up(session, params):
    session.start()
    session.advance(params.timer_initial_seconds * params.game_tick_rate)

    assert session.status is SessionStatus.STOPPED
    assert session.engine.remaining_seconds == 0
    assert session.engine.is_finished


def test_commands_ignored_after_stop(session):
    session.start()
    session.stop()
    state = session.engine.state

    assert session.execute(GameCommand(CommandType.MOVE_FOCUS_DIRECTION, direction=3)) is state


def test_from_config():
    config = SessionConfig(
        platform="event_log",
        language="pl",
        params=GameParams(grid_radius=2),
    )
    session = GameSession.from_config(config, seed=9)

    assert isinstance(session.integration, EventLogIntegration)
    assert session.integration.logger is session.engine.logger
    assert session.language == "pl"
    assert session.engine.seed == 9
    assert len(session.engine.state.grid) == 19


def test_to_dict(session):
    session.start()
    data = session.to_dict(include_grid=False)

    assert data["status"] == "RUNNING"
    assert data["platform"] == "event_log"
    assert data["language"] == "en"
    assert "grid" not in data


def test_from_config_bounds_history_and_events():
    config = SessionConfig(params=GameParams(grid_radius=2), max_history=4, max_events=6)
    session = GameSession.from_config(config, seed=1)
    session.start()
    for _ in range(10):
        session.advance(1)
        session.execute(GameCommand(CommandType.MOVE_FOCUS_DIRECTION, direction=3))

    assert len(session.engine.history) == 4
    assert session.engine.logger.get_event_count() == 6
    assert session.engine.logger.dropped_events > 0
