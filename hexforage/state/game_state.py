"""
Snapshot stanu gry (GameState).

GameState jest NIEMUTOWALNY. Każda operacja logiki (ruch, przechwycenie,
wymiana ze slotem, tick) przyjmuje snapshot i zwraca nowy, zbudowany przez
dataclasses.replace. Czytelnicy (renderer, API, testy) widzą tylko gotowe
snapshoty - nigdy stanu w połowie zmiany.

POLA:
═══════════════════════════════════════════════════════════════════

    Czas
    ─────────────────────────────────────────────────────────────
    tick                    Licznik ticków (>= 0, tylko rośnie)
    remaining_seconds       Licznik sesji (>= 0, maleje co game_tick_rate)

    Protagonista
    ─────────────────────────────────────────────────────────────
    protagonist             Pozycja (zawsze na aktywnej siatce)
    facing_direction        Kierunek 0..5
    focus                   protagonist + HEX_DIRECTIONS[facing]

    Pola gry
    ─────────────────────────────────────────────────────────────
    grid                    Siatka świata
    inventory_grid          Siatka inwentarza (promień 3, pusta na start)
    active_field            WORLD | INVENTORY

    Hotbar
    ─────────────────────────────────────────────────────────────
    hotbar                  6 slotów (indeks koloru lub None)
    selected_hotbar_index   Wybrany slot 0..5

    Przechwycenie
    ─────────────────────────────────────────────────────────────
    is_action_mode                  Przycisk akcji wciśnięty
    capture_charge_start_tick       Tick startu ładowania (None = brak)
    capture_cooldown_ticks_remaining
    flash                           Flash(kind, started_tick) lub None
    carried_color                   Przenoszony kolor (lub None)

    Auto-ruch
    ─────────────────────────────────────────────────────────────
    auto_move_target        Cel protagonisty
    auto_focus_target       Pole, na które ma patrzeć po dotarciu
    auto_move_ticks_remaining  Ticki do następnego kroku
    pending_step            Zakolejkowany pojedynczy krok (kierunek)

    Inwentarz
    ─────────────────────────────────────────────────────────────
    world_position          Pozycja w świecie zapamiętana przy wejściu
    world_facing            do inwentarza (przywracana przy wyjściu)

    Szablony
    ─────────────────────────────────────────────────────────────
    active_template         ActiveTemplate lub None
    completed_templates     ID ukończonych szablonów (tylko rośnie)

Przenoszony kolor:
    Kolor w ręku NIE leży na żadnej siatce. Jest "przy" protagoniście -
    carried_cell zwraca jego pozycję i przesuwa się razem z nim.
    Dzięki temu zasada zachowania jest prosta:

        kolory świata + kolory inwentarza + hotbar + przenoszony = const
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from ..core.hex_coord import HexCoord, ORIGIN
from ..core.hex_grid import HexGrid
from ..core.params import GameParams
from ..core.rng import GameRNG


HOTBAR_SIZE = 6


class ActiveField(Enum):
    """Które pole jest aktualnie aktywne (gdzie działa protagonista)."""
    WORLD = "world"
    INVENTORY = "inventory"


class FlashKind(Enum):
    """Rodzaj krótkiego sygnału wizualnego po rozstrzygnięciu przechwycenia."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Flash:
    """
    Aktywny flash.

    Attributes:
        kind (FlashKind): Sukces albo porażka
        started_tick (int): Tick, w którym flash się zaczął
    """
    kind: FlashKind
    started_tick: int


@dataclass(frozen=True)
class ActiveTemplate:
    """
    Stan aktywnego szablonu budowli.

    Dopóki anchor jest None, szablon "podąża" za focusem. Pierwszy kolor
    na focusie go kotwiczy: ustala pozycję, kolor bazowy i obrót.

    Attributes:
        template_id (str): ID w bibliotece szablonów
        anchor (Optional[HexCoord]): Pozycja kotwicy w świecie
        base_color (Optional[int]): Kolor kotwicy
        rotation (int): Obrót 0..5 (facing przy zakotwiczeniu)
        has_errors (bool): Czy któreś pole ma zły kolor
        filled_cells (FrozenSet[HexCoord]): Pola z poprawnym kolorem
        completed_at_tick (Optional[int]): Tick ukończenia (None = nieukończony)
    """
    template_id: str
    anchor: Optional[HexCoord] = None
    base_color: Optional[int] = None
    rotation: int = 0
    has_errors: bool = False
    filled_cells: FrozenSet[HexCoord] = frozenset()
    completed_at_tick: Optional[int] = None

    @property
    def is_anchored(self) -> bool:
        return self.anchor is not None

    @property
    def is_completed(self) -> bool:
        return self.completed_at_tick is not None


@dataclass(frozen=True)
class GameState:
    """
    Niemutowalny snapshot całej gry.

    Note:
        Nie twórz ręcznie - użyj create_initial_state().
        Zmiany tylko przez dataclasses.replace (patrz evolve()).
    """
    grid: HexGrid
    inventory_grid: HexGrid
    remaining_seconds: int

    tick: int = 0
    protagonist: HexCoord = ORIGIN
    facing_direction: int = 0
    focus: HexCoord = HexCoord(0, -1)
    active_field: ActiveField = ActiveField.WORLD

    hotbar: Tuple[Optional[int], ...] = field(default=(None,) * HOTBAR_SIZE)
    selected_hotbar_index: int = 0

    is_action_mode: bool = False
    capture_charge_start_tick: Optional[int] = None
    capture_cooldown_ticks_remaining: int = 0
    flash: Optional[Flash] = None
    carried_color: Optional[int] = None

    auto_move_target: Optional[HexCoord] = None
    auto_focus_target: Optional[HexCoord] = None
    auto_move_ticks_remaining: int = 0
    pending_step: Optional[int] = None

    world_position: Optional[HexCoord] = None
    world_facing: int = 0

    active_template: Optional[ActiveTemplate] = None
    completed_templates: FrozenSet[str] = frozenset()

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI POCHODNE
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_carrying(self) -> bool:
        """True jeśli protagonista niesie kolor."""
        return self.carried_color is not None

    @property
    def carried_cell(self) -> Optional[HexCoord]:
        """Pozycja przenoszonego koloru (pozycja protagonisty) lub None."""
        return self.protagonist if self.is_carrying else None

    @property
    def is_auto_moving(self) -> bool:
        """True jeśli trwa auto-ruch do celu."""
        return self.auto_move_target is not None

    @property
    def is_charging(self) -> bool:
        """True jeśli trwa ładowanie przechwycenia."""
        return self.capture_charge_start_tick is not None

    @property
    def in_inventory(self) -> bool:
        """True jeśli aktywna jest siatka inwentarza."""
        return self.active_field is ActiveField.INVENTORY

    @property
    def active_grid(self) -> HexGrid:
        """Siatka, na której aktualnie działa protagonista."""
        return self.inventory_grid if self.in_inventory else self.grid

    @property
    def selected_slot_color(self) -> Optional[int]:
        """Kolor w wybranym slocie hotbara."""
        return self.hotbar[self.selected_hotbar_index]

    def focus_color(self) -> Optional[int]:
        """Kolor pola focus na aktywnej siatce (None = puste lub poza siatką)."""
        return self.active_grid.color_at(self.focus)

    # ─────────────────────────────────────────────────────────────────────────
    # MODYFIKACJE
    # ─────────────────────────────────────────────────────────────────────────

    def evolve(self, **changes) -> GameState:
        """Skrót dla dataclasses.replace(self, **changes)."""
        return replace(self, **changes)

    def with_active_grid(self, grid: HexGrid) -> GameState:
        """Podmienia aktywną siatkę (świat albo inwentarz)."""
        if self.in_inventory:
            return replace(self, inventory_grid=grid)
        return replace(self, grid=grid)


# ═══════════════════════════════════════════════════════════════════════════
# TWORZENIE I ODCZYT
# ═══════════════════════════════════════════════════════════════════════════

def create_initial_state(params: GameParams, rng: GameRNG) -> GameState:
    """
    Buduje stan początkowy sesji.

    - Świat generowany losowo (promień params.grid_radius)
    - Inwentarz pusty (promień params.inventory_radius)
    - Protagonista w (0, 0), patrzy w górę, focus w (0, -1)
    - Hotbar pusty, licznik = timer_initial_seconds

    Args:
        params: Parametry gry
        rng: Generator (zużywany przy generowaniu świata)

    Returns:
        GameState: Snapshot z tick = 0
    """
    grid = HexGrid.generate(
        params.grid_radius,
        params.initial_color_probability,
        params.palette_size,
        rng,
    )
    return GameState(
        grid=grid,
        inventory_grid=HexGrid.create_empty(params.inventory_radius),
        remaining_seconds=params.timer_initial_seconds,
        focus=ORIGIN.neighbor(0),
    )


def total_color_count(state: GameState) -> int:
    """
    Liczba jednostek koloru w całej grze.

    Świat + inwentarz + hotbar + przenoszony kolor. Stała dla każdej
    operacji poza edycją (set_cell / set_hotbar_slot).
    """
    hotbar = sum(1 for slot in state.hotbar if slot is not None)
    carried = 1 if state.is_carrying else 0
    return state.grid.total_colored() + state.inventory_grid.total_colored() + hotbar + carried


def color_multiset(state: GameState) -> Tuple[Tuple[int, int], ...]:
    """
    Posortowany multizbiór kolorów (color_index, liczba) w całej grze.

    Mocniejsza wersja total_color_count - zachowana jest także
    liczność każdego koloru z osobna.
    """
    counts = dict(state.grid.count_colors())
    for color, count in state.inventory_grid.count_colors().items():
        counts[color] = counts.get(color, 0) + count
    extras = list(state.hotbar) + [state.carried_color]
    for color in extras:
        if color is not None:
            counts[color] = counts.get(color, 0) + 1
    return tuple(sorted(counts.items()))
