"""
Integracja z platformą hostującą grę (hooki cyklu życia).

Platforma (portal z grami, wrapper webview, serwer) chce wiedzieć kiedy
gra jest gotowa, kiedy gracz faktycznie gra, a kiedy jest pauza.
Silnik gry o tym NIE wie - hooki woła GameSession na swojej granicy.

HOOKI:
═══════════════════════════════════════════════════════════════════

    init()               Jednorazowa inicjalizacja integracji
    on_game_ready()      Zasoby załadowane, stan początkowy gotowy
    on_gameplay_start()  Gracz zaczyna grać (start / wznowienie)
    on_gameplay_stop()   Gracz przestaje grać (koniec / pauza)
    on_pause()           Sesja wstrzymana
    on_resume()          Sesja wznowiona

WARIANTY (zamknięty zbiór):
═══════════════════════════════════════════════════════════════════

    "null"       NullIntegration      - nic nie robi
    "event_log"  EventLogIntegration  - zapisuje hooki do EventLogger

    Wybór przez SessionConfig.platform -> get_integration(name).

Przykład użycia:
    >>> integration = get_integration("event_log", logger=engine.logger)
    >>> session = GameSession(engine, integration)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..events.event_logger import EventLogger


class PlatformIntegration(ABC):
    """
    Bazowa klasa integracji platformy.

    Attributes:
        name (str): Nazwa wariantu (klucz w INTEGRATION_REGISTRY)
        is_initialized (bool): Czy init() zostało wywołane
    """

    name: str = "base"

    def __init__(self):
        self.is_initialized = False

    def init(self) -> None:
        """Jednorazowa inicjalizacja (kolejne wywołania są ignorowane)."""
        if self.is_initialized:
            return
        self.is_initialized = True
        self._on_init()

    def _on_init(self) -> None:
        """Hook dla podklas - wywoływany raz przez init()."""

    @abstractmethod
    def on_game_ready(self) -> None:
        pass

    @abstractmethod
    def on_gameplay_start(self) -> None:
        pass

    @abstractmethod
    def on_gameplay_stop(self) -> None:
        pass

    @abstractmethod
    def on_pause(self) -> None:
        pass

    @abstractmethod
    def on_resume(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# ═══════════════════════════════════════════════════════════════════════════
# WARIANTY
# ═══════════════════════════════════════════════════════════════════════════

class NullIntegration(PlatformIntegration):
    """Brak platformy - wszystkie hooki są no-op."""

    name = "null"

    def on_game_ready(self) -> None:
        pass

    def on_gameplay_start(self) -> None:
        pass

    def on_gameplay_stop(self) -> None:
        pass

    def on_pause(self) -> None:
        pass

    def on_resume(self) -> None:
        pass


class EventLogIntegration(PlatformIntegration):
    """
    Zapisuje każdy hook do logu zdarzeń (PLATFORM_HOOK).

    Przydatne do testów i replay - log pokazuje kiedy platforma
    dowiedziała się o starcie/pauzie gry.

    Attributes:
        logger (Optional[EventLogger]): Logger, do którego trafiają hooki
        tick_source (Callable[[], int]): Skąd brać numer ticka dla zdarzenia
        calls (List[str]): Nazwy wywołanych hooków, w kolejności
    """

    name = "event_log"

    def __init__(
        self,
        logger: Optional["EventLogger"] = None,
        tick_source: Optional[Callable[[], int]] = None,
    ):
        super().__init__()
        self.logger = logger
        self.tick_source = tick_source or (lambda: 0)
        self.calls: List[str] = []

    def bind(self, logger: "EventLogger", tick_source: Callable[[], int]) -> None:
        """Podpina logger i źródło ticków (robi to GameSession)."""
        self.logger = logger
        self.tick_source = tick_source

    def _record(self, hook: str) -> None:
        self.calls.append(hook)
        if self.logger is not None:
            self.logger.log_platform_hook(self.tick_source(), hook)

    def _on_init(self) -> None:
        self._record("init")

    def on_game_ready(self) -> None:
        self._record("game_ready")

    def on_gameplay_start(self) -> None:
        self._record("gameplay_start")

    def on_gameplay_stop(self) -> None:
        self._record("gameplay_stop")

    def on_pause(self) -> None:
        self._record("pause")

    def on_resume(self) -> None:
        self._record("resume")


# ═══════════════════════════════════════════════════════════════════════════
# REJESTR
# ═══════════════════════════════════════════════════════════════════════════

INTEGRATION_REGISTRY: Dict[str, type] = {
    "null": NullIntegration,
    "event_log": EventLogIntegration,
}


def get_integration(name: str, **kwargs: Any) -> PlatformIntegration:
    """
    Factory function do tworzenia integracji po nazwie.

    Args:
        name: Nazwa wariantu ("null" | "event_log")
        **kwargs: Argumenty konstruktora wariantu

    Returns:
        PlatformIntegration: Instancja integracji

    Raises:
        ValueError: Jeśli nazwa nie istnieje w rejestrze
    """
    integration_class = INTEGRATION_REGISTRY.get(name.lower())

    if integration_class is None:
        raise ValueError(f"Unknown platform integration: {name}. "
                         f"Available: {list(INTEGRATION_REGISTRY.keys())}")

    return integration_class(**kwargs)
