"""
Simulation module - tick, komendy, silnik i sesja.

Zawiera:
- tick: Czysta funkcja upływu czasu
- GameCommand / CommandType / apply_command: Komendy gracza
- GameEngine: Właściciel snapshotu, RNG i loggera
- GameSession / SessionStatus: Granica z platformą hostującą
- state_to_dict / state_summary: Serializacja snapshotu
"""

from .tick import tick
from .commands import (
    CommandType,
    GameCommand,
    COMMAND_HANDLERS,
    AUTHORING_COMMANDS,
    apply_command,
)
from .snapshot import state_to_dict, state_summary, coord_to_list, grid_to_list, template_to_dict
from .engine import GameEngine
from .session import GameSession, SessionStatus

__all__ = [
    "tick", "CommandType", "GameCommand", "COMMAND_HANDLERS",
    "AUTHORING_COMMANDS", "apply_command",
    "state_to_dict", "state_summary", "coord_to_list", "grid_to_list",
    "template_to_dict",
    "GameEngine", "GameSession", "SessionStatus",
]
