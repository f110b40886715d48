"""
Inventory module - hotbar i wymiana kolorów z polem focus.

Zawiera:
- eat_to_hotbar: Zjedzenie koloru z focus do hotbara
- exchange_with_slot / ExchangeKind: Cztery przypadki wymiany
- select_hotbar_slot: Wybór slotu
- perform_context_action: Akcja głównego przycisku
- total_color_count / color_multiset: Zasada zachowania koloru
"""

from .hotbar import (
    ExchangeKind,
    first_empty_slot,
    classify_exchange,
    select_hotbar_slot,
    eat_to_hotbar,
    exchange_with_slot,
    place_from_selected_slot,
    perform_context_action,
    set_hotbar_slot,
)
from ..state.game_state import HOTBAR_SIZE, total_color_count, color_multiset

__all__ = [
    "ExchangeKind", "first_empty_slot", "classify_exchange",
    "select_hotbar_slot", "eat_to_hotbar", "exchange_with_slot",
    "place_from_selected_slot", "perform_context_action", "set_hotbar_slot",
    "HOTBAR_SIZE", "total_color_count", "color_multiset",
]
