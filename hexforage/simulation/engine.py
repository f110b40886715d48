"""
Silnik gry (GameEngine) - właściciel sesji logiki.

GameEngine trzyma aktualny snapshot, deterministyczny RNG i logger
zdarzeń. Cała logika jest w czystych funkcjach (apply_command, tick) -
silnik tylko je wywołuje, podmienia snapshot i loguje co się zmieniło.

ODPOWIEDZIALNOŚCI:
═══════════════════════════════════════════════════════════════════

    • Tworzy stan początkowy z GameParams i seeda
    • Przyjmuje komendy (execute) i ticki (advance)
    • Porównuje snapshot przed/po i loguje zdarzenia:
      ruch, ładowanie, przechwycenie, drop, hotbar, szablony, odrzucenia
    • Udostępnia zapytania (pozycja, hotbar, pola, liczniki kolorów)

DETERMINIZM:
═══════════════════════════════════════════════════════════════════

    • Jedna instancja GameRNG na sesję
    • Ten sam seed + te same komendy = te same snapshoty
    • Logger nie wpływa na logikę (tylko czyta snapshoty)

Przykład użycia:
    >>> engine = GameEngine(GameParams(), seed=12345)
    >>> engine.start()
    >>> engine.execute(GameCommand(CommandType.MOVE_TO, q=2, r=-1))
    >>> engine.advance(24)
    >>> engine.focus
    HexCoord(q=2, r=-1)
    >>> engine.finish()
    >>> engine.save_log("output/session_12345.json")
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

from ..core.hex_coord import HexCoord
from ..core.hex_grid import Cell
from ..core.params import GameParams
from ..core.rng import GameRNG
from ..state.game_state import GameState, Flash, FlashKind, create_initial_state, total_color_count
from ..capture.capture import (
    CaptureRejection,
    can_capture,
    can_drop,
    preview_capture_chance,
)
from ..inventory.hotbar import classify_exchange
from ..movement.movement import can_move, compute_breadcrumbs
from ..events.event_logger import EventLogger, EventType
from ..templates.template import TemplateLibrary, load_default_templates
from ..templates.tracker import (
    TemplateEvent,
    classify_template_change,
    template_progress,
    update_template_state,
)
from .commands import AUTHORING_COMMANDS, CommandType, GameCommand, apply_command
from .snapshot import state_summary, state_to_dict
from .tick import tick


class GameEngine:
    """
    Silnik jednej sesji gry.

    Attributes:
        params (GameParams): Niemutowalne parametry
        seed (int): Ziarno losowości
        rng (GameRNG): Generator sesji
        state (GameState): Aktualny snapshot
        logger (EventLogger): Logger zdarzeń
        history (List[GameCommand]): Zaakceptowane i odrzucone komendy (do replay)
        max_history (Optional[int]): Limit długości history (None = bez limitu)
        templates (TemplateLibrary): Biblioteka szablonów budowli
    """

    def __init__(
        self,
        params: Optional[GameParams] = None,
        seed: Optional[int] = None,
        logger: Optional[EventLogger] = None,
        templates: Optional[TemplateLibrary] = None,
        max_history: Optional[int] = None,
        max_events: Optional[int] = None,
    ):
        """
        Tworzy silnik i stan początkowy.

        Args:
            params: Parametry gry (domyślne jeśli None)
            seed: Ziarno (domyślnie params.seed)
            logger: Logger zdarzeń (nowy jeśli None)
            templates: Biblioteka szablonów (data/templates.yaml jeśli None)
            max_history: Limit history - najstarsze komendy są usuwane
            max_events: Limit zdarzeń nowego loggera
        """
        self.params = params or GameParams()
        self.seed = self.params.seed if seed is None else seed
        self.rng = GameRNG(self.seed)
        self.state: GameState = create_initial_state(self.params, self.rng)
        self.logger = logger or EventLogger(
            seed=self.seed,
            grid_radius=self.params.grid_radius,
            palette_size=self.params.palette_size,
            game_tick_rate=self.params.game_tick_rate,
            max_events=max_events,
        )
        self.templates = templates if templates is not None else load_default_templates()
        if max_history is not None and max_history < 1:
            raise ValueError(f"max_history must be >= 1, got {max_history}")
        self.max_history = max_history
        self.history: List[GameCommand] = []
        self.is_started = False
        self.is_finished = False

    # ─────────────────────────────────────────────────────────────────────────
    # CYKL ŻYCIA
    # ─────────────────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Loguje początek sesji (idempotentne)."""
        if self.is_started:
            return
        self.is_started = True
        self.logger.log_session_start(self.state.tick, state_summary(self.state))

    def finish(self) -> Dict[str, Any]:
        """
        Kończy sesję i zwraca podsumowanie.

        Returns:
            Dict: Podsumowanie stanu końcowego
        """
        summary = state_summary(self.state)
        if not self.is_finished:
            self.is_finished = True
            self.logger.log_session_end(self.state.tick, summary)
        return summary

    @property
    def is_time_up(self) -> bool:
        """True jeśli licznik sesji doszedł do 0."""
        return self.state.remaining_seconds <= 0

    # ─────────────────────────────────────────────────────────────────────────
    # KOMENDY
    # ─────────────────────────────────────────────────────────────────────────

    def execute(self, command: GameCommand) -> GameState:
        """
        Stosuje komendę do aktualnego stanu i loguje wynik.

        Args:
            command: Komenda gracza

        Returns:
            GameState: Nowy snapshot
        """
        self._record(command)

        if command.type is CommandType.TICK:
            return self.advance(command.steps, record=False)

        before = self.state
        after = apply_command(before, self.params, command, self.rng, self.templates)
        self.state = after

        if after is before:
            self.logger.log_rejection(before.tick, command.to_dict(), self._rejection_reason(before, command))
            return after

        self.logger.log_command(before.tick, command.to_dict())
        self._log_transition(before, after, command)
        return after

    def execute_dict(self, data: Dict[str, Any]) -> GameState:
        """Parsuje komendę z JSON i ją wykonuje (ValueError dla nieznanego typu)."""
        return self.execute(GameCommand.from_dict(data))

    def advance(self, steps: int = 1, record: bool = True) -> GameState:
        """
        Przesuwa czas o steps ticków (logując zdarzenia każdego ticka).

        Args:
            steps: Liczba ticków (<= 0 -> brak zmian)
            record: Czy dopisać komendę TICK do historii
        """
        if record:
            self._record(GameCommand(CommandType.TICK, steps=steps))

        for _ in range(max(0, steps)):
            before = self.state
            after = tick(before, self.params, self.rng)
            if after.active_template is not None and after.grid is not before.grid:
                after, _ = update_template_state(after, self.params, self.templates)
            self.state = after
            self._log_transition(before, self.state, None)
        return self.state

    def _record(self, command: GameCommand) -> None:
        self.history.append(command)
        if self.max_history is not None and len(self.history) > self.max_history:
            del self.history[: len(self.history) - self.max_history]

    # Skróty komend
    def move_focus(self, direction: int) -> GameState:
        return self.execute(GameCommand(CommandType.MOVE_FOCUS_DIRECTION, direction=direction))

    def step(self, direction: int) -> GameState:
        return self.execute(GameCommand(CommandType.STEP, direction=direction))

    def move_to(self, coord: HexCoord) -> GameState:
        return self.execute(GameCommand(CommandType.MOVE_TO, q=coord.q, r=coord.r))

    def start_action(self) -> GameState:
        return self.execute(GameCommand(CommandType.START_ACTION))

    def end_action(self) -> GameState:
        return self.execute(GameCommand(CommandType.END_ACTION))

    def press_action(self) -> GameState:
        return self.execute(GameCommand(CommandType.PRESS_ACTION))

    def select_slot(self, index: int) -> GameState:
        return self.execute(GameCommand(CommandType.SELECT_SLOT, index=index))

    def exchange_slot(self, index: int) -> GameState:
        return self.execute(GameCommand(CommandType.EXCHANGE_SLOT, index=index))

    def set_cell(self, coord: HexCoord, color: Optional[int]) -> GameState:
        return self.execute(GameCommand(CommandType.SET_CELL, q=coord.q, r=coord.r, color=color))

    def toggle_inventory(self) -> GameState:
        return self.execute(GameCommand(CommandType.TOGGLE_INVENTORY))

    def activate_template(self, template_id: str) -> GameState:
        return self.execute(GameCommand(CommandType.ACTIVATE_TEMPLATE, template_id=template_id))

    def deactivate_template(self) -> GameState:
        return self.execute(GameCommand(CommandType.DEACTIVATE_TEMPLATE))

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def tick(self) -> int:
        return self.state.tick

    @property
    def protagonist(self) -> HexCoord:
        return self.state.protagonist

    @property
    def focus(self) -> HexCoord:
        return self.state.focus

    @property
    def facing_direction(self) -> int:
        return self.state.facing_direction

    @property
    def hotbar(self) -> Tuple[Optional[int], ...]:
        return self.state.hotbar

    @property
    def selected_hotbar_index(self) -> int:
        return self.state.selected_hotbar_index

    @property
    def remaining_seconds(self) -> int:
        return self.state.remaining_seconds

    @property
    def is_auto_moving(self) -> bool:
        return self.state.is_auto_moving

    @property
    def is_action_mode(self) -> bool:
        return self.state.is_action_mode

    @property
    def capture_cooldown(self) -> int:
        return self.state.capture_cooldown_ticks_remaining

    @property
    def flash(self) -> Optional[Flash]:
        return self.state.flash

    @property
    def carried_color(self) -> Optional[int]:
        return self.state.carried_color

    def get_cell(self, coord: HexCoord) -> Optional[Cell]:
        """Pole świata (None gdy poza siatką)."""
        return self.state.grid.get_cell(coord)

    def count_colors(self) -> Dict[int, int]:
        """Liczba pól świata dla każdego koloru."""
        return self.state.grid.count_colors()

    def colored_cells(self) -> List[Cell]:
        """Kolorowe pola świata."""
        return self.state.grid.get_colored_cells()

    def total_color_count(self) -> int:
        """Wszystkie jednostki koloru w grze (świat, inwentarz, hotbar, ładunek)."""
        return total_color_count(self.state)

    def capture_preview(self) -> Optional[int]:
        """Szansa przechwycenia pola focus lub None."""
        return preview_capture_chance(self.state, self.params)

    def breadcrumbs(self) -> List[HexCoord]:
        """Pozostała trasa auto-ruchu."""
        return compute_breadcrumbs(self.state, self.params)

    def template_progress(self) -> Optional[Dict[str, Any]]:
        """Postęp aktywnego szablonu (None = brak szablonu)."""
        return template_progress(self.state, self.params, self.templates)

    def snapshot(self, include_grid: bool = True) -> Dict[str, Any]:
        """Snapshot stanu jako słownik JSON."""
        return state_to_dict(self.state, self.params, include_grid)

    def save_log(self, filepath: str) -> None:
        """Zapisuje log zdarzeń do pliku JSON."""
        self.logger.save(filepath)

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE ZMIAN
    # ─────────────────────────────────────────────────────────────────────────

    def _rejection_reason(self, state: GameState, command: GameCommand) -> Optional[str]:
        """Powód, dla którego komenda nie zmieniła stanu (jeśli da się go wskazać)."""
        reason = None
        if command.type is CommandType.START_ACTION:
            if state.capture_cooldown_ticks_remaining > 0:
                reason = CaptureRejection.ON_COOLDOWN
            elif state.is_action_mode:
                reason = CaptureRejection.ALREADY_IN_ACTION_MODE
        elif command.type is CommandType.PRESS_ACTION:
            if state.is_carrying:
                reason = can_drop(state).reason
            else:
                reason = CaptureRejection.TARGET_EMPTY
        elif command.type is CommandType.EAT:
            reason = can_capture(state, self.params).reason
        elif command.type is CommandType.MOVE_TO and command.coord is not None:
            reason = can_move(state, self.params, command.coord).reason
        elif command.type is CommandType.ACTIVATE_TEMPLATE:
            return "unknown_template"
        elif command.type is CommandType.DEACTIVATE_TEMPLATE:
            return "no_active_template"
        return reason.value if reason is not None else None

    def _log_transition(
        self,
        before: GameState,
        after: GameState,
        command: Optional[GameCommand],
    ) -> None:
        """Porównuje dwa snapshoty i loguje zdarzenia domenowe."""
        at = after.tick
        log = self.logger

        if before.active_field is not after.active_field:
            log.log_event(at, EventType.FIELD_TOGGLE, active_field=after.active_field.value)
        elif before.protagonist != after.protagonist:
            log.log_move(at, before.protagonist.axial, after.protagonist.axial)

        if not before.is_charging and after.is_charging:
            log.log_charge_start(at, after.focus.axial, preview_capture_chance(after, self.params))

        new_flash = after.flash is not None and after.flash != before.flash
        if new_flash:
            success = after.flash.kind is FlashKind.SUCCESS
            color = after.carried_color if success else before.focus_color()
            log.log_capture(
                at, success, before.focus.axial, color,
                after.capture_cooldown_ticks_remaining,
            )
        elif before.is_charging and not after.is_charging:
            log.log_charge_cancel(at, before.focus.axial)

        if before.is_carrying and not after.is_carrying:
            log.log_drop(at, before.protagonist.axial, before.carried_color)

        if before.hotbar != after.hotbar:
            if command is not None and command.type in AUTHORING_COMMANDS:
                log.log_event(at, EventType.CELL_AUTHORED, hotbar=list(after.hotbar))
            else:
                changed = next(i for i, (a, b) in enumerate(zip(before.hotbar, after.hotbar)) if a != b)
                if command is not None and command.type is CommandType.EXCHANGE_SLOT:
                    kind = classify_exchange(before, changed)
                    log.log_hotbar(at, EventType.HOTBAR_EXCHANGE, changed, list(after.hotbar), kind.value)
                else:
                    log.log_hotbar(at, EventType.HOTBAR_EAT, changed, list(after.hotbar))
        elif before.selected_hotbar_index != after.selected_hotbar_index:
            log.log_hotbar(at, EventType.HOTBAR_SELECT, after.selected_hotbar_index, list(after.hotbar))

        if (
            command is not None
            and command.type is CommandType.SET_CELL
            and (before.grid is not after.grid or before.inventory_grid is not after.inventory_grid)
        ):
            log.log_event(at, EventType.CELL_AUTHORED, cell=[command.q, command.r], color=command.color)

        if before.remaining_seconds > 0 and after.remaining_seconds == 0:
            log.log_event(at, EventType.TIMER_EXPIRED)

        self._log_template_transition(before, after, command)

    def _log_template_transition(
        self,
        before: GameState,
        after: GameState,
        command: Optional[GameCommand],
    ) -> None:
        """Loguje zmianę aktywnego szablonu lub jego postępu."""
        old, new = before.active_template, after.active_template
        at = after.tick
        log = self.logger

        if command is not None and command.type is CommandType.ACTIVATE_TEMPLATE:
            log.log_template(at, EventType.TEMPLATE_ACTIVATED, new.template_id)
            return
        if command is not None and command.type is CommandType.DEACTIVATE_TEMPLATE:
            log.log_template(at, EventType.TEMPLATE_DEACTIVATED, old.template_id)
            return

        change = classify_template_change(old, new)
        if change is None:
            return
        event_type = EventType.TEMPLATE_PROGRESS
        if change is TemplateEvent.COMPLETED:
            event_type = EventType.TEMPLATE_COMPLETED
        log.log_template(
            at, event_type, new.template_id,
            event=change.value,
            filled=len(new.filled_cells),
            has_errors=new.has_errors,
            anchor=list(new.anchor.axial) if new.anchor is not None else None,
        )
