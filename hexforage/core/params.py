"""
Parametry gry (GameParams) i konfiguracja sesji (SessionConfig).

Wszystkie stałe mechaniki są zebrane w jednym niemutowalnym obiekcie,
który jest przekazywany jawnie do każdej funkcji logiki. Nie ma
globalnego stanu konfiguracji - obiekt powstaje raz przy starcie
(z data/defaults.yaml przez ConfigLoader) i nigdy się nie zmienia.

PARAMETRY:
═══════════════════════════════════════════════════════════════════

    Świat
    ─────────────────────────────────────────────────────────────
    grid_radius                  Promień siatki świata (R)
    inventory_radius             Promień siatki inwentarza
    initial_color_probability    Szansa na kolor pola przy generowaniu
    palette                      Lista kolorów (hex RGB) - tylko rozmiar
                                 ma znaczenie dla logiki
    player_base_color_index      Kolor bazowy gracza (dla szansy)

    Czas
    ─────────────────────────────────────────────────────────────
    game_tick_rate               Ticki na sekundę symulowaną (12)
    timer_initial_seconds        Początkowy stan licznika (300)
    auto_move_step_ticks         Co ile ticków krok auto-ruchu (2)

    Przechwycenie
    ─────────────────────────────────────────────────────────────
    capture_hold_duration_ticks      Czas ładowania (6)
    capture_failure_cooldown_ticks   Cooldown po porażce (12)
    capture_flash_duration_ticks     Czas trwania flasha (2)
    drop_cooldown_ticks              Cooldown po upuszczeniu (6)
    chance_base_percent              Szansa przy dystansie 0 (100)
    chance_penalty_per_palette_distance  Kara za krok palety (20)
    chance_min_percent               Szansa przy max dystansie (10)

    Przenoszenie
    ─────────────────────────────────────────────────────────────
    carrying_move_requires_empty Kolorowe pola blokują ruch z ładunkiem
    carry_flicker_cycle_ticks    Cykl migania przenoszonego koloru
    carry_flicker_on_fraction    Część cyklu, w której kolor jest widoczny

Przykład:
    >>> params = GameParams(grid_radius=10, initial_color_probability=1.0)
    >>> params.palette_size
    8
    >>> GameParams.from_dict({"grid_radius": -1})
    Traceback (most recent call last):
    ValueError: grid_radius must be >= 0, got -1
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, Optional, Tuple


DEFAULT_PALETTE: Tuple[str, ...] = (
    "#FF8000", "#CC6600", "#996600", "#666600",
    "#660099", "#9933FF", "#CC66FF", "#FF99FF",
)


@dataclass(frozen=True)
class GameParams:
    """
    Niemutowalna konfiguracja mechaniki gry.

    Note:
        Walidacja odbywa się w __post_init__ - błędna konfiguracja
        rzuca ValueError przy konstrukcji, nigdy w trakcie ticka.
    """
    grid_radius: int = 5
    inventory_radius: int = 3
    initial_color_probability: float = 0.30
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    player_base_color_index: int = 0

    game_tick_rate: int = 12
    timer_initial_seconds: int = 300
    auto_move_step_ticks: int = 2

    capture_hold_duration_ticks: int = 6
    capture_failure_cooldown_ticks: int = 12
    capture_flash_duration_ticks: int = 2
    drop_cooldown_ticks: int = 6
    chance_base_percent: int = 100
    chance_penalty_per_palette_distance: int = 20
    chance_min_percent: int = 10

    carrying_move_requires_empty: bool = True
    carry_flicker_cycle_ticks: int = 6
    carry_flicker_on_fraction: float = 0.5

    seed: int = 12345

    def __post_init__(self) -> None:
        # YAML daje listy - normalizujemy do krotki (hashowalna, niemutowalna)
        if not isinstance(self.palette, tuple):
            object.__setattr__(self, "palette", tuple(self.palette))
        self.validate()

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA
    # ─────────────────────────────────────────────────────────────────────────

    def validate(self) -> None:
        """
        Sprawdza spójność parametrów.

        Raises:
            ValueError: Przy pierwszym błędnym parametrze
        """
        _require(self.grid_radius >= 0, "grid_radius must be >= 0, got {}", self.grid_radius)
        _require(self.inventory_radius >= 0, "inventory_radius must be >= 0, got {}", self.inventory_radius)
        _require(
            0.0 <= self.initial_color_probability <= 1.0,
            "initial_color_probability must be in [0, 1], got {}",
            self.initial_color_probability,
        )
        _require(len(self.palette) > 0, "palette must not be empty{}", "")
        _require(
            0 <= self.player_base_color_index < len(self.palette),
            "player_base_color_index out of palette range: {}",
            self.player_base_color_index,
        )
        _require(self.game_tick_rate >= 1, "game_tick_rate must be >= 1, got {}", self.game_tick_rate)
        _require(self.timer_initial_seconds >= 0, "timer_initial_seconds must be >= 0, got {}", self.timer_initial_seconds)
        _require(self.auto_move_step_ticks >= 1, "auto_move_step_ticks must be >= 1, got {}", self.auto_move_step_ticks)

        for name in (
            "capture_hold_duration_ticks",
            "capture_failure_cooldown_ticks",
            "capture_flash_duration_ticks",
            "drop_cooldown_ticks",
            "carry_flicker_cycle_ticks",
        ):
            value = getattr(self, name)
            _require(value >= 0, name + " must be >= 0, got {}", value)

        _require(
            0 <= self.chance_min_percent <= self.chance_base_percent <= 100,
            "expected 0 <= chance_min_percent <= chance_base_percent <= 100, got {}",
            (self.chance_min_percent, self.chance_base_percent),
        )
        _require(
            self.chance_penalty_per_palette_distance >= 0,
            "chance_penalty_per_palette_distance must be >= 0, got {}",
            self.chance_penalty_per_palette_distance,
        )
        _require(
            0.0 <= self.carry_flicker_on_fraction <= 1.0,
            "carry_flicker_on_fraction must be in [0, 1], got {}",
            self.carry_flicker_on_fraction,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI POCHODNE
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def palette_size(self) -> int:
        """Liczba kolorów w palecie."""
        return len(self.palette)

    @property
    def max_palette_distance(self) -> int:
        """Największy możliwy dystans na kole palety (8 kolorów -> 4)."""
        return self.palette_size // 2

    @property
    def world_cell_count(self) -> int:
        """Liczba pól świata: 3R² + 3R + 1."""
        r = self.grid_radius
        return 3 * r * r + 3 * r + 1

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameParams:
        """
        Tworzy parametry ze słownika (np. sekcji `game` z YAML).

        Nieznane klucze są ignorowane - pozwala to trzymać w YAML
        komentarze/sekcje dla warstwy prezentacji.

        Args:
            data: Słownik parametrów

        Returns:
            GameParams: Zwalidowane parametry
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje parametry do słownika (palette jako lista)."""
        result = asdict(self)
        result["palette"] = list(self.palette)
        return result


@dataclass(frozen=True)
class SessionConfig:
    """
    Konfiguracja sesji - rzeczy spoza mechaniki gry.

    Attributes:
        platform (str): Nazwa integracji platformy ("null" | "event_log")
        language (str): Domyślny język dla warstwy prezentacji
        params (GameParams): Parametry mechaniki
        max_history (Optional[int]): Limit komend w GameEngine.history
        max_events (Optional[int]): Limit zdarzeń w EventLogger
    """
    platform: str = "null"
    language: str = "en"
    params: GameParams = field(default_factory=GameParams)
    max_history: Optional[int] = 10_000
    max_events: Optional[int] = 50_000

    def __post_init__(self):
        for name in ("max_history", "max_events"):
            value = getattr(self, name)
            _require(value is None or value >= 1, name + " must be >= 1, got {}", value)


def _require(condition: bool, message: str, value: Any) -> None:
    """Rzuca ValueError z sformatowanym komunikatem jeśli warunek nie zachodzi."""
    if not condition:
        raise ValueError(message.format(value))
