"""
Komendy gry i reducer apply_command.

Warstwa wejścia (klawiatura, dotyk, API HTTP) tłumaczy zdarzenia na
dyskretne komendy GameCommand. Reducer apply_command jest czystą
funkcją: (stan, parametry, komenda, rng) -> nowy stan.

KOMENDY:
═══════════════════════════════════════════════════════════════════

    Typ                     Pola            Działanie
    ─────────────────────   ─────────────   ──────────────────────────
    tick                    steps           tick(state, steps)
    move_focus_direction    direction       set_facing
    move_focus_delta        dq, dr          move_focus_delta
    step                    direction       queue_step
    move_to                 q, r            start_auto_move
    cancel_auto_move        -               cancel_auto_move
    start_action            -               start_action_mode
    end_action              -               end_action_mode
    press_action            -               perform_context_action
    eat                     -               eat_to_hotbar
    select_slot             index           select_hotbar_slot
    exchange_slot           index           exchange_with_slot
    set_cell                q, r, color     edycja pola (autoring)
    set_hotbar_slot         index, color    edycja slotu (autoring)
    toggle_inventory        -               toggle_active_field
    activate_template       template_id     activate_template
    deactivate_template     -               deactivate_template

Po każdej komendzie (poza edycją), która zmienia siatkę świata,
aktywny szablon jest aktualizowany przez update_template_state.

Format JSON:
    {"type": "move_to", "q": 2, "r": -1}
    {"type": "tick", "steps": 12}
    {"type": "set_cell", "q": 0, "r": -1, "color": 3}
    {"type": "activate_template", "template_id": "flower"}
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..core.hex_coord import HexCoord
from ..core.params import GameParams
from ..core.rng import GameRNG
from ..state.game_state import GameState
from ..capture.capture import start_action_mode, end_action_mode
from ..inventory.hotbar import (
    eat_to_hotbar,
    exchange_with_slot,
    perform_context_action,
    select_hotbar_slot,
    set_hotbar_slot,
)
from ..movement.movement import (
    cancel_auto_move,
    move_focus_delta,
    queue_step,
    set_facing,
    start_auto_move,
    toggle_active_field,
)
from ..templates.template import TemplateLibrary, load_default_templates
from ..templates.tracker import activate_template, deactivate_template, update_template_state
from .tick import tick


class CommandType(Enum):
    """Typ komendy (wartość = nazwa w JSON)."""
    TICK = "tick"
    MOVE_FOCUS_DIRECTION = "move_focus_direction"
    MOVE_FOCUS_DELTA = "move_focus_delta"
    STEP = "step"
    MOVE_TO = "move_to"
    CANCEL_AUTO_MOVE = "cancel_auto_move"
    START_ACTION = "start_action"
    END_ACTION = "end_action"
    PRESS_ACTION = "press_action"
    EAT = "eat"
    SELECT_SLOT = "select_slot"
    EXCHANGE_SLOT = "exchange_slot"
    SET_CELL = "set_cell"
    SET_HOTBAR_SLOT = "set_hotbar_slot"
    TOGGLE_INVENTORY = "toggle_inventory"
    ACTIVATE_TEMPLATE = "activate_template"
    DEACTIVATE_TEMPLATE = "deactivate_template"


# Komendy, które omijają zasadę zachowania koloru
AUTHORING_COMMANDS = frozenset({CommandType.SET_CELL, CommandType.SET_HOTBAR_SLOT})


@dataclass(frozen=True)
class GameCommand:
    """
    Pojedyncza komenda gracza.

    Attributes:
        type (CommandType): Rodzaj komendy
        steps (int): Liczba ticków (tick)
        direction (Optional[int]): Kierunek 0..5 (move_focus_direction, step)
        dq, dr (int): Przesunięcie focusa (move_focus_delta)
        q, r (Optional[int]): Współrzędne pola (move_to, set_cell)
        index (Optional[int]): Slot hotbara
        color (Optional[int]): Kolor (set_cell, set_hotbar_slot; None = puste)
        template_id (Optional[str]): ID szablonu (activate_template)
    """
    type: CommandType
    steps: int = 1
    direction: Optional[int] = None
    dq: int = 0
    dr: int = 0
    q: Optional[int] = None
    r: Optional[int] = None
    index: Optional[int] = None
    color: Optional[int] = None
    template_id: Optional[str] = None

    @property
    def coord(self) -> Optional[HexCoord]:
        """Współrzędne (q, r) jako HexCoord lub None."""
        if self.q is None or self.r is None:
            return None
        return HexCoord(self.q, self.r)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameCommand:
        """
        Parsuje komendę z JSON.

        Raises:
            ValueError: Nieznany typ komendy lub brak pola "type"
        """
        raw_type = data.get("type")
        try:
            command_type = CommandType(raw_type)
        except ValueError:
            raise ValueError(
                f"Unknown command type: {raw_type}. "
                f"Available: {[t.value for t in CommandType]}"
            ) from None

        fields_ = {k: v for k, v in data.items() if k in _COMMAND_FIELDS}
        return cls(type=command_type, **fields_)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje komendę (pomija pola domyślne)."""
        result: Dict[str, Any] = {"type": self.type.value}
        for key, value in asdict(self).items():
            if key == "type" or value == _DEFAULTS[key]:
                continue
            result[key] = value
        return result


_COMMAND_FIELDS = ("steps", "direction", "dq", "dr", "q", "r", "index", "color", "template_id")
_DEFAULTS = {
    "steps": 1, "direction": None, "dq": 0, "dr": 0, "q": None, "r": None,
    "index": None, "color": None, "template_id": None,
}


# ═══════════════════════════════════════════════════════════════════════════
# HANDLERY
# ═══════════════════════════════════════════════════════════════════════════

Handler = Callable[[GameState, GameParams, GameCommand, GameRNG], GameState]


def _handle_direction(state, params, command, rng):
    if command.direction is None:
        return state
    return set_facing(state, command.direction)


def _handle_step(state, params, command, rng):
    if command.direction is None:
        return state
    return queue_step(state, command.direction)


def _handle_move_to(state, params, command, rng):
    if command.coord is None:
        return state
    return start_auto_move(state, params, command.coord)


def _handle_select(state, params, command, rng):
    if command.index is None:
        return state
    return select_hotbar_slot(state, command.index)


def _handle_exchange(state, params, command, rng):
    if command.index is None:
        return state
    return exchange_with_slot(state, command.index)


def _handle_set_cell(state, params, command, rng):
    if command.coord is None:
        return state
    if command.color is not None and not 0 <= command.color < params.palette_size:
        return state
    grid = state.active_grid.set_cell(command.coord, command.color)
    return state.with_active_grid(grid)


def _handle_set_slot(state, params, command, rng):
    if command.index is None:
        return state
    if command.color is not None and not 0 <= command.color < params.palette_size:
        return state
    return set_hotbar_slot(state, command.index, command.color)


COMMAND_HANDLERS: Dict[CommandType, Handler] = {
    CommandType.TICK: lambda s, p, c, rng: tick(s, p, rng, c.steps),
    CommandType.MOVE_FOCUS_DIRECTION: _handle_direction,
    CommandType.MOVE_FOCUS_DELTA: lambda s, p, c, rng: move_focus_delta(s, c.dq, c.dr),
    CommandType.STEP: _handle_step,
    CommandType.MOVE_TO: _handle_move_to,
    CommandType.CANCEL_AUTO_MOVE: lambda s, p, c, rng: cancel_auto_move(s),
    CommandType.START_ACTION: lambda s, p, c, rng: start_action_mode(s, p),
    CommandType.END_ACTION: lambda s, p, c, rng: end_action_mode(s),
    CommandType.PRESS_ACTION: lambda s, p, c, rng: perform_context_action(s, p),
    CommandType.EAT: lambda s, p, c, rng: eat_to_hotbar(s),
    CommandType.SELECT_SLOT: _handle_select,
    CommandType.EXCHANGE_SLOT: _handle_exchange,
    CommandType.SET_CELL: _handle_set_cell,
    CommandType.SET_HOTBAR_SLOT: _handle_set_slot,
    CommandType.TOGGLE_INVENTORY: lambda s, p, c, rng: toggle_active_field(s),
}


# Komendy szablonów potrzebują biblioteki zamiast RNG
TemplateHandler = Callable[[GameState, GameCommand, TemplateLibrary], GameState]


def _handle_activate_template(state, command, templates):
    template = templates.find(command.template_id) if command.template_id else None
    if template is None:
        return state
    return activate_template(state, template)


TEMPLATE_HANDLERS: Dict[CommandType, TemplateHandler] = {
    CommandType.ACTIVATE_TEMPLATE: _handle_activate_template,
    CommandType.DEACTIVATE_TEMPLATE: lambda s, c, t: deactivate_template(s),
}


def apply_command(
    state: GameState,
    params: GameParams,
    command: GameCommand,
    rng: GameRNG,
    templates: Optional[TemplateLibrary] = None,
) -> GameState:
    """
    Stosuje komendę do snapshotu.

    Args:
        state: Aktualny snapshot (nie jest modyfikowany)
        params: Parametry gry
        command: Komenda
        rng: Generator sesji (używany tylko przez tick)
        templates: Biblioteka szablonów (domyślnie data/templates.yaml)

    Returns:
        GameState: Nowy snapshot (ta sama instancja gdy komenda odrzucona)
    """
    if templates is None:
        templates = load_default_templates()
    if command.type in TEMPLATE_HANDLERS:
        return TEMPLATE_HANDLERS[command.type](state, command, templates)

    result = COMMAND_HANDLERS[command.type](state, params, command, rng)
    if (
        result.active_template is not None
        and result.grid is not state.grid
        and command.type not in AUTHORING_COMMANDS
    ):
        result, _ = update_template_state(result, params, templates)
    return result
