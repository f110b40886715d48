"""
State module - niemutowalny snapshot gry.

Zawiera:
- GameState: Snapshot całej gry (frozen dataclass)
- Flash / FlashKind: Sygnał po rozstrzygnięciu przechwycenia
- ActiveField: Świat albo inwentarz
- ActiveTemplate: Stan aktywnego szablonu budowli
- create_initial_state: Stan początkowy sesji
- total_color_count / color_multiset: Zasada zachowania koloru
"""

from .game_state import (
    GameState,
    Flash,
    FlashKind,
    ActiveField,
    ActiveTemplate,
    HOTBAR_SIZE,
    create_initial_state,
    total_color_count,
    color_multiset,
)

__all__ = [
    "GameState", "Flash", "FlashKind", "ActiveField", "ActiveTemplate", "HOTBAR_SIZE",
    "create_initial_state", "total_color_count", "color_multiset",
]
