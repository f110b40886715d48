"""
Sesja gry - granica między silnikiem a platformą hostującą.

GameSession łączy GameEngine z wybraną PlatformIntegration.
Silnik nie wie, która integracja jest aktywna - hooki są wołane
wyłącznie tutaj, przy zmianach cyklu życia sesji.

CYKL ŻYCIA:
═══════════════════════════════════════════════════════════════════

    CREATED ──start()──► RUNNING ──pause()──► PAUSED
                            ▲                    │
                            └─────resume()───────┘
                            │
                          stop() / licznik = 0
                            ▼
                         STOPPED

    start():   init -> on_game_ready -> on_gameplay_start
    pause():   on_pause -> on_gameplay_stop
    resume():  on_resume -> on_gameplay_start
    stop():    on_gameplay_stop

    W stanie PAUSED ticki są ignorowane (czas gry stoi),
    a komendy nadal działają.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Any, Dict, Optional

from ..core.params import SessionConfig
from ..platform.integration import (
    EventLogIntegration,
    NullIntegration,
    PlatformIntegration,
    get_integration,
)
from ..state.game_state import GameState
from ..templates.template import TemplateLibrary
from .commands import CommandType, GameCommand
from .engine import GameEngine


class SessionStatus(Enum):
    """Status sesji."""
    CREATED = auto()
    RUNNING = auto()
    PAUSED = auto()
    STOPPED = auto()


class GameSession:
    """
    Sesja gry z integracją platformy.

    Attributes:
        engine (GameEngine): Silnik logiki
        integration (PlatformIntegration): Aktywny wariant platformy
        language (str): Język dla warstwy prezentacji (z SessionConfig)
        status (SessionStatus): Aktualny status

    Example:
        >>> session = GameSession.from_config(SessionConfig(platform="event_log"))
        >>> session.start()
        >>> session.advance(12)
        >>> session.stop()
    """

    def __init__(
        self,
        engine: GameEngine,
        integration: Optional[PlatformIntegration] = None,
        language: str = "en",
    ):
        self.engine = engine
        self.integration = integration or NullIntegration()
        self.language = language
        self.status = SessionStatus.CREATED

        if isinstance(self.integration, EventLogIntegration) and self.integration.logger is None:
            self.integration.bind(engine.logger, lambda: self.engine.tick)

    @classmethod
    def from_config(
        cls,
        config: SessionConfig,
        seed: Optional[int] = None,
        templates: Optional[TemplateLibrary] = None,
    ) -> GameSession:
        """
        Buduje sesję z SessionConfig.

        Raises:
            ValueError: Nieznana nazwa platformy
        """
        integration = get_integration(config.platform)
        engine = GameEngine(
            config.params,
            seed=seed,
            max_history=config.max_history,
            max_events=config.max_events,
            templates=templates,
        )
        return cls(engine, integration, language=config.language)

    # ─────────────────────────────────────────────────────────────────────────
    # CYKL ŻYCIA
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    def start(self) -> None:
        """Startuje sesję (tylko ze stanu CREATED)."""
        if self.status is not SessionStatus.CREATED:
            return
        self.integration.init()
        self.integration.on_game_ready()
        self.engine.start()
        self.status = SessionStatus.RUNNING
        self.integration.on_gameplay_start()

    def pause(self) -> None:
        """Wstrzymuje sesję."""
        if self.status is not SessionStatus.RUNNING:
            return
        self.status = SessionStatus.PAUSED
        self.integration.on_pause()
        self.integration.on_gameplay_stop()

    def resume(self) -> None:
        """Wznawia wstrzymaną sesję."""
        if self.status is not SessionStatus.PAUSED:
            return
        self.status = SessionStatus.RUNNING
        self.integration.on_resume()
        self.integration.on_gameplay_start()

    def stop(self) -> Dict[str, Any]:
        """
        Kończy sesję.

        Returns:
            Dict: Podsumowanie stanu końcowego
        """
        if self.status is SessionStatus.STOPPED:
            return self.engine.finish()
        was_playing = self.status is SessionStatus.RUNNING
        self.status = SessionStatus.STOPPED
        if was_playing:
            self.integration.on_gameplay_stop()
        return self.engine.finish()

    # ─────────────────────────────────────────────────────────────────────────
    # WEJŚCIE
    # ─────────────────────────────────────────────────────────────────────────

    def advance(self, steps: int = 1) -> GameState:
        """
        Przesuwa czas gry (tylko w stanie RUNNING).

        Gdy licznik dojdzie do 0, sesja jest automatycznie kończona.
        """
        if self.status is not SessionStatus.RUNNING:
            return self.engine.state
        state = self.engine.advance(steps)
        if self.engine.is_time_up:
            self.stop()
        return state

    def execute(self, command: GameCommand) -> GameState:
        """Wykonuje komendę (TICK przechodzi przez advance)."""
        if command.type is CommandType.TICK:
            return self.advance(command.steps)
        if self.status is SessionStatus.STOPPED:
            return self.engine.state
        return self.engine.execute(command)

    def execute_dict(self, data: Dict[str, Any]) -> GameState:
        """Parsuje komendę z JSON i ją wykonuje."""
        return self.execute(GameCommand.from_dict(data))

    def to_dict(self, include_grid: bool = True) -> Dict[str, Any]:
        """Snapshot stanu + status sesji."""
        result = self.engine.snapshot(include_grid)
        result["status"] = self.status.name
        result["language"] = self.language
        result["platform"] = self.integration.name
        return result
