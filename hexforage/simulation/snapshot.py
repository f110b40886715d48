"""
Serializacja snapshotu GameState do słowników JSON.

Używane przez API (odpowiedzi HTTP), EventLogger (podsumowania stanu)
i CLI. Współrzędne są zapisywane jako [q, r], pola siatki jako
{"q", "r", "color"}.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from ..core.hex_coord import HexCoord
from ..core.hex_grid import HexGrid
from ..core.params import GameParams
from ..state.game_state import ActiveTemplate, GameState, total_color_count
from ..capture.capture import capture_phase, preview_capture_chance


def coord_to_list(coord: Optional[HexCoord]) -> Optional[List[int]]:
    """HexCoord -> [q, r] (None przechodzi bez zmian)."""
    if coord is None:
        return None
    return [coord.q, coord.r]


def grid_to_list(grid: HexGrid, colored_only: bool = False) -> List[Dict[str, Any]]:
    """Pola siatki jako lista słowników."""
    cells = grid.get_colored_cells() if colored_only else grid.cells()
    return [
        {"q": cell.coord.q, "r": cell.coord.r, "color": cell.color_index}
        for cell in cells
    ]


def state_summary(state: GameState) -> Dict[str, Any]:
    """Krótkie podsumowanie stanu (dla logu zdarzeń)."""
    return {
        "tick": state.tick,
        "remaining_seconds": state.remaining_seconds,
        "protagonist": coord_to_list(state.protagonist),
        "hotbar": list(state.hotbar),
        "carried_color": state.carried_color,
        "colored_cells": state.grid.total_colored(),
        "total_color_count": total_color_count(state),
    }


def template_to_dict(active: Optional[ActiveTemplate]) -> Optional[Dict[str, Any]]:
    """Stan aktywnego szablonu (bez oczekiwanych kolorów - patrz template_progress)."""
    if active is None:
        return None
    return {
        "template_id": active.template_id,
        "anchor": coord_to_list(active.anchor),
        "base_color": active.base_color,
        "rotation": active.rotation,
        "has_errors": active.has_errors,
        "filled_cells": sorted(coord_to_list(c) for c in active.filled_cells),
        "completed_at_tick": active.completed_at_tick,
    }


def state_to_dict(
    state: GameState,
    params: GameParams,
    include_grid: bool = True,
) -> Dict[str, Any]:
    """
    Pełny snapshot stanu jako słownik JSON.

    Args:
        state: Snapshot
        params: Parametry (potrzebne do fazy i podglądu szansy)
        include_grid: Czy dołączyć kolorowe pola obu siatek

    Returns:
        Dict: Snapshot gotowy do json.dumps
    """
    result: Dict[str, Any] = {
        "tick": state.tick,
        "remaining_seconds": state.remaining_seconds,
        "protagonist": coord_to_list(state.protagonist),
        "focus": coord_to_list(state.focus),
        "facing_direction": state.facing_direction,
        "active_field": state.active_field.value,
        "hotbar": list(state.hotbar),
        "selected_hotbar_index": state.selected_hotbar_index,
        "is_action_mode": state.is_action_mode,
        "capture_charge_start_tick": state.capture_charge_start_tick,
        "capture_cooldown_ticks_remaining": state.capture_cooldown_ticks_remaining,
        "capture_phase": capture_phase(state, params).name,
        "capture_chance_percent": preview_capture_chance(state, params),
        "flash": None,
        "carried_color": state.carried_color,
        "carried_cell": coord_to_list(state.carried_cell),
        "is_auto_moving": state.is_auto_moving,
        "auto_move_target": coord_to_list(state.auto_move_target),
        "color_counts": {str(k): v for k, v in sorted(state.grid.count_colors().items())},
        "total_color_count": total_color_count(state),
        "active_template": template_to_dict(state.active_template),
        "completed_templates": sorted(state.completed_templates),
    }
    if state.flash is not None:
        result["flash"] = {"kind": state.flash.kind.value, "started_tick": state.flash.started_tick}

    if include_grid:
        result["grid"] = {
            "radius": state.grid.radius,
            "cells": grid_to_list(state.grid, colored_only=True),
        }
        result["inventory_grid"] = {
            "radius": state.inventory_grid.radius,
            "cells": grid_to_list(state.inventory_grid, colored_only=True),
        }
    return result
