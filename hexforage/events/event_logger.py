"""
System logowania zdarzeń sesji do formatu JSON (replay / debug).

Każde istotne zdarzenie (komenda, ruch, przechwycenie, wymiana ze
slotem) jest zapisywane z kontekstem. Log razem z seedem pozwala
odtworzyć sesję krok po kroku.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    SESSION_START / SESSION_END
    ─────────────────────────────────────────────────────────────
    Początek i koniec sesji.
    Data: podsumowanie stanu (pozycja, hotbar, liczba kolorów)

    COMMAND / COMMAND_REJECTED
    ─────────────────────────────────────────────────────────────
    Komenda gracza zaakceptowana albo odrzucona.
    Data: command (dict), reason (dla odrzuconych)

    PROTAGONIST_MOVE
    ─────────────────────────────────────────────────────────────
    Zmiana pozycji protagonisty.
    Data: from [q, r], to [q, r]

    CAPTURE_CHARGE_START / CAPTURE_CHARGE_CANCEL
    ─────────────────────────────────────────────────────────────
    Start / przerwanie ładowania.
    Data: target [q, r], chance_percent

    CAPTURE_SUCCESS / CAPTURE_FAILURE
    ─────────────────────────────────────────────────────────────
    Rozstrzygnięcie przechwycenia.
    Data: target [q, r], color, cooldown

    CARRY_DROP
    ─────────────────────────────────────────────────────────────
    Odłożenie przenoszonego koloru.
    Data: at [q, r], color

    HOTBAR_EAT / HOTBAR_EXCHANGE / HOTBAR_SELECT
    ─────────────────────────────────────────────────────────────
    Operacje na hotbarze.
    Data: index, hotbar (po operacji), kind (dla wymiany)

    CELL_AUTHORED / FIELD_TOGGLE / TIMER_EXPIRED
    ─────────────────────────────────────────────────────────────
    Edycja pola, przełączenie siatki, licznik doszedł do 0.

    PLATFORM_HOOK
    ─────────────────────────────────────────────────────────────
    Wywołanie hooka integracji platformy (tylko EventLogIntegration).
    Data: hook

    TEMPLATE_ACTIVATED / TEMPLATE_DEACTIVATED
    ─────────────────────────────────────────────────────────────
    Zmiana aktywnego szablonu budowli.
    Data: template_id

    TEMPLATE_PROGRESS / TEMPLATE_COMPLETED
    ─────────────────────────────────────────────────────────────
    Zakotwiczenie, nowe poprawne pole, błąd, reset, ukończenie.
    Data: template_id, event, filled, has_errors, anchor

LIMIT ZDARZEŃ:
    Przy max_events najstarsze zdarzenia są usuwane (dropped_events
    liczy usunięte).

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "seed": 12345,
        "game_tick_rate": 12,
        "grid": {"radius": 5, "palette_size": 8},
        "timestamp": "2026-01-01T12:00:00"
    },
    "initial_state": {...},
    "events": [
        {"tick": 0, "type": "SESSION_START", "data": {...}},
        {"tick": 7, "type": "CAPTURE_SUCCESS", "data": {"target": [0, -1], "color": 2}},
        ...
    ],
    "dropped_events": 0,
    "final_state": {...}
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
from pathlib import Path


class EventType(Enum):
    """Typ zdarzenia w sesji."""

    # Sesja
    SESSION_START = auto()
    SESSION_END = auto()
    TIMER_EXPIRED = auto()

    # Komendy
    COMMAND = auto()
    COMMAND_REJECTED = auto()

    # Ruch
    PROTAGONIST_MOVE = auto()
    FIELD_TOGGLE = auto()

    # Przechwycenie
    CAPTURE_CHARGE_START = auto()
    CAPTURE_CHARGE_CANCEL = auto()
    CAPTURE_SUCCESS = auto()
    CAPTURE_FAILURE = auto()
    CARRY_DROP = auto()

    # Hotbar
    HOTBAR_EAT = auto()
    HOTBAR_EXCHANGE = auto()
    HOTBAR_SELECT = auto()

    # Edycja / platforma
    CELL_AUTHORED = auto()
    PLATFORM_HOOK = auto()

    # Szablony budowli
    TEMPLATE_ACTIVATED = auto()
    TEMPLATE_DEACTIVATED = auto()
    TEMPLATE_PROGRESS = auto()
    TEMPLATE_COMPLETED = auto()


@dataclass
class GameEvent:
    """
    Pojedyncze zdarzenie w sesji.

    Attributes:
        tick (int): Numer ticka kiedy zdarzenie nastąpiło
        event_type (EventType): Typ zdarzenia
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    tick: int
    event_type: EventType
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result: Dict[str, Any] = {
            "tick": self.tick,
            "type": self.event_type.name,
        }
        if self.data:
            result["data"] = self.data
        return result


class EventLogger:
    """
    Logger zdarzeń sesji.

    Zbiera wszystkie zdarzenia i może je zapisać do pliku JSON.

    Attributes:
        events (List[GameEvent]): Lista wszystkich zdarzeń
        metadata (Dict): Metadane sesji
        initial_state (Dict): Podsumowanie stanu początkowego
        final_state (Dict): Podsumowanie stanu końcowego
        max_events (Optional[int]): Limit trzymanych zdarzeń (None = bez limitu)
        dropped_events (int): Liczba zdarzeń usuniętych przez limit

    Example:
        >>> logger = EventLogger(seed=12345, grid_radius=5)
        >>> logger.log_move(tick=3, from_pos=(0, 0), to_pos=(0, -1))
        >>> logger.save("output/session_12345.json")
    """

    def __init__(
        self,
        seed: int,
        grid_radius: int = 5,
        palette_size: int = 8,
        game_tick_rate: int = 12,
        max_events: Optional[int] = None,
    ):
        """
        Inicjalizuje logger.

        Args:
            seed: Ziarno losowości sesji
            grid_radius: Promień siatki świata
            palette_size: Liczba kolorów palety
            game_tick_rate: Ticki na sekundę
            max_events: Limit zdarzeń w pamięci (None = bez limitu)
        """
        if max_events is not None and max_events < 1:
            raise ValueError(f"max_events must be >= 1, got {max_events}")
        self.events: List[GameEvent] = []
        self.max_events = max_events
        self.dropped_events = 0
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "seed": seed,
            "game_tick_rate": game_tick_rate,
            "grid": {"radius": grid_radius, "palette_size": palette_size},
            "timestamp": datetime.now().isoformat(),
        }
        self.initial_state: Dict[str, Any] = {}
        self.final_state: Dict[str, Any] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: GameEvent) -> None:
        """Dodaje zdarzenie do logu (usuwa najstarsze ponad max_events)."""
        self.events.append(event)
        if self.max_events is not None and len(self.events) > self.max_events:
            overflow = len(self.events) - self.max_events
            del self.events[:overflow]
            self.dropped_events += overflow

    def log_event(self, tick: int, event_type: EventType, **data: Any) -> GameEvent:
        """
        Tworzy i loguje zdarzenie.

        Args:
            tick: Numer ticka
            event_type: Typ zdarzenia
            **data: Dodatkowe dane

        Returns:
            GameEvent: Utworzone zdarzenie
        """
        event = GameEvent(tick=tick, event_type=event_type, data=dict(data))
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_session_start(self, tick: int, summary: Dict[str, Any]) -> None:
        """Loguje start sesji."""
        self.initial_state = summary
        self.log_event(tick, EventType.SESSION_START, state=summary)

    def log_session_end(self, tick: int, summary: Dict[str, Any]) -> None:
        """Loguje koniec sesji."""
        self.final_state = dict(summary, total_ticks=tick)
        self.log_event(tick, EventType.SESSION_END, total_ticks=tick)

    def log_command(self, tick: int, command: Dict[str, Any]) -> None:
        """Loguje zaakceptowaną komendę."""
        self.log_event(tick, EventType.COMMAND, command=command)

    def log_rejection(self, tick: int, command: Dict[str, Any], reason: Optional[str]) -> None:
        """Loguje odrzuconą komendę (stan bez zmian)."""
        self.log_event(tick, EventType.COMMAND_REJECTED, command=command, reason=reason)

    def log_move(self, tick: int, from_pos: tuple, to_pos: tuple) -> None:
        """Loguje ruch protagonisty."""
        self.log_event(
            tick,
            EventType.PROTAGONIST_MOVE,
            **{"from": list(from_pos), "to": list(to_pos)},
        )

    def log_charge_start(self, tick: int, target: tuple, chance_percent: Optional[int]) -> None:
        """Loguje start ładowania przechwycenia."""
        self.log_event(
            tick,
            EventType.CAPTURE_CHARGE_START,
            target=list(target),
            chance_percent=chance_percent,
        )

    def log_charge_cancel(self, tick: int, target: tuple) -> None:
        """Loguje przerwanie ładowania (bez kary)."""
        self.log_event(tick, EventType.CAPTURE_CHARGE_CANCEL, target=list(target))

    def log_capture(
        self,
        tick: int,
        success: bool,
        target: tuple,
        color: Optional[int],
        cooldown: int,
    ) -> None:
        """Loguje rozstrzygnięcie przechwycenia."""
        self.log_event(
            tick,
            EventType.CAPTURE_SUCCESS if success else EventType.CAPTURE_FAILURE,
            target=list(target),
            color=color,
            cooldown=cooldown,
        )

    def log_drop(self, tick: int, at: tuple, color: int) -> None:
        """Loguje odłożenie przenoszonego koloru."""
        self.log_event(tick, EventType.CARRY_DROP, at=list(at), color=color)

    def log_hotbar(
        self,
        tick: int,
        event_type: EventType,
        index: int,
        hotbar: List[Optional[int]],
        kind: Optional[str] = None,
    ) -> None:
        """Loguje operację na hotbarze (eat / exchange / select)."""
        data: Dict[str, Any] = {"index": index, "hotbar": list(hotbar)}
        if kind is not None:
            data["kind"] = kind
        self.log_event(tick, event_type, **data)

    def log_platform_hook(self, tick: int, hook: str) -> None:
        """Loguje wywołanie hooka platformy."""
        self.log_event(tick, EventType.PLATFORM_HOOK, hook=hook)

    def log_template(
        self,
        tick: int,
        event_type: EventType,
        template_id: str,
        **data: Any,
    ) -> None:
        """Loguje zmianę szablonu budowli."""
        self.log_event(tick, event_type, template_id=template_id, **data)

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "initial_state": self.initial_state,
            "events": [e.to_dict() for e in self.events],
            "dropped_events": self.dropped_events,
            "final_state": self.final_state,
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Zwraca log jako string JSON.

        Args:
            indent: Wcięcie (None = compact)
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        """Zwraca liczbę zdarzeń."""
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[GameEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_in_tick(self, tick: int) -> List[GameEvent]:
        """Filtruje zdarzenia w ticku."""
        return [e for e in self.events if e.tick == tick]

    def clear(self) -> None:
        """Usuwa zdarzenia (metadane zostają)."""
        self.events = []
        self.dropped_events = 0
