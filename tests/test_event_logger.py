"""
Testy dla EventLogger.
"""

import json
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexforage.events.event_logger import EventLogger, EventType, GameEvent


@pytest.fixture
def logger():
    return EventLogger(seed=12345, grid_radius=5, palette_size=8, game_tick_rate=12)


def test_metadata(logger):
    assert logger.metadata["seed"] == 12345
    assert logger.metadata["game_tick_rate"] == 12
    assert logger.metadata["grid"] == {"radius": 5, "palette_size": 8}
    assert "timestamp" in logger.metadata


def test_event_to_dict_omits_empty_data():
    assert GameEvent(3, EventType.TIMER_EXPIRED).to_dict() == {"tick": 3, "type": "TIMER_EXPIRED"}


def test_log_move(logger):
    logger.log_move(tick=3, from_pos=(0, 0), to_pos=(0, -1))

    event = logger.events[0]
    assert event.event_type is EventType.PROTAGONIST_MOVE
    assert event.data == {"from": [0, 0], "to": [0, -1]}


def test_log_capture_types(logger):
    logger.log_capture(7, True, (0, -1), 2, 0)
    logger.log_capture(20, False, (1, -1), 4, 12)

    assert [e.event_type for e in logger.events] == [EventType.CAPTURE_SUCCESS, EventType.CAPTURE_FAILURE]
    assert logger.events[1].data == {"target": [1, -1], "color": 4, "cooldown": 12}


def test_log_hotbar_kind_optional(logger):
    logger.log_hotbar(1, EventType.HOTBAR_EAT, 0, [2, None])
    logger.log_hotbar(2, EventType.HOTBAR_EXCHANGE, 1, [2, 3], kind="swap")

    assert "kind" not in logger.events[0].data
    assert logger.events[1].data["kind"] == "swap"


def test_session_start_end(logger):
    logger.log_session_start(0, {"tick": 0, "hotbar": []})
    logger.log_session_end(50, {"tick": 50, "hotbar": [1]})

    assert logger.initial_state == {"tick": 0, "hotbar": []}
    assert logger.events[0].data == {"state": {"tick": 0, "hotbar": []}}
    assert logger.final_state["total_ticks"] == 50
    assert logger.get_event_count() == 2


def test_filters(logger):
    logger.log_event(1, EventType.COMMAND, command={"type": "eat"})
    logger.log_event(1, EventType.HOTBAR_EAT, index=0)
    logger.log_event(2, EventType.COMMAND, command={"type": "tick"})

    assert len(logger.get_events_by_type(EventType.COMMAND)) == 2
    assert len(logger.get_events_in_tick(1)) == 2


def test_to_json_and_save(logger, tmp_path):
    logger.log_rejection(4, {"type": "eat"}, "target_empty")

    parsed = json.loads(logger.to_json())
    assert parsed["events"][0]["data"]["reason"] == "target_empty"

    path = tmp_path / "nested" / "log.json"
    logger.save(str(path))
    assert json.loads(path.read_text(encoding="utf-8")) == parsed


def test_clear_keeps_metadata(logger):
    logger.log_platform_hook(0, "init")
    logger.clear()

    assert logger.get_event_count() == 0
    assert logger.metadata["seed"] == 12345


def test_max_events_drops_oldest():
    logger = EventLogger(seed=1, max_events=3)
    for tick in range(5):
        logger.log_event(tick, EventType.COMMAND)

    assert [e.tick for e in logger.events] == [2, 3, 4]
    assert logger.dropped_events == 2
    assert logger.to_dict()["dropped_events"] == 2

    logger.clear()
    assert logger.dropped_events == 0


def test_unbounded_by_default(logger):
    for tick in range(100):
        logger.log_event(tick, EventType.COMMAND)

    assert logger.get_event_count() == 100
    assert logger.dropped_events == 0


def test_invalid_max_events_raises():
    with pytest.raises(ValueError, match="max_events"):
        EventLogger(seed=1, max_events=0)


def test_log_template(logger):
    logger.log_template(4, EventType.TEMPLATE_PROGRESS, "flower", event="anchored", filled=1)

    event = logger.events[0]
    assert event.event_type is EventType.TEMPLATE_PROGRESS
    assert event.data == {"template_id": "flower", "event": "anchored", "filled": 1}
