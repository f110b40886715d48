"""
Śledzenie postępu aktywnego szablonu budowli.

CYKL ŻYCIA:
═══════════════════════════════════════════════════════════════════

    activate_template     -> szablon aktywny, niezakotwiczony
    kolor na focusie      -> kotwica = focus, kolor bazowy = kolor focusa,
                             obrót = facing
    zmiany siatki świata  -> walidacja: filled_cells, has_errors
    wszystkie pola OK     -> completed_at_tick, ID do completed_templates
    wszystkie pola puste  -> kotwica zdjęta (szablon znów podąża za focusem)
    deactivate_template   -> brak aktywnego szablonu

update_template_state woła reducer komend po każdej zmianie siatki
świata (poza komendami edycji) oraz silnik po każdym ticku. Siatka
inwentarza nie jest śledzona.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..core.params import GameParams
from ..state.game_state import ActiveTemplate, GameState
from .matching import template_cell_positions, validate_template, is_template_empty
from .template import BuildTemplate, TemplateLibrary


class TemplateEvent(Enum):
    """Zmiana postępu szablonu widoczna dla gracza."""
    ANCHORED = "anchored"
    CELL_CORRECT = "cell_correct"
    CELL_WRONG = "cell_wrong"
    COMPLETED = "completed"
    RESET = "reset"


def activate_template(state: GameState, template: BuildTemplate) -> GameState:
    """Ustawia nowy, niezakotwiczony szablon (zastępuje poprzedni)."""
    return state.evolve(active_template=ActiveTemplate(template.template_id))


def deactivate_template(state: GameState) -> GameState:
    if state.active_template is None:
        return state
    return state.evolve(active_template=None)


def classify_template_change(
    before: Optional[ActiveTemplate],
    after: Optional[ActiveTemplate],
) -> Optional[TemplateEvent]:
    """
    Zdarzenie wynikające ze zmiany stanu tego samego szablonu.

    Kolejność: ukończenie > zdjęcie kotwicy > zakotwiczenie >
    nowe poprawne pole > pojawienie się błędu.
    """
    if before is None or after is None or before.template_id != after.template_id:
        return None
    if after.is_completed and not before.is_completed:
        return TemplateEvent.COMPLETED
    if before.is_anchored and not after.is_anchored:
        return TemplateEvent.RESET
    if after.is_anchored and not before.is_anchored:
        return TemplateEvent.ANCHORED
    if len(after.filled_cells) > len(before.filled_cells):
        return TemplateEvent.CELL_WRONG if after.has_errors else TemplateEvent.CELL_CORRECT
    if after.has_errors and not before.has_errors:
        return TemplateEvent.CELL_WRONG
    return None


def update_template_state(
    state: GameState,
    params: GameParams,
    templates: TemplateLibrary,
) -> Tuple[GameState, Optional[TemplateEvent]]:
    """
    Aktualizuje aktywny szablon po zmianie siatki świata.

    Args:
        state: Snapshot po zmianie
        params: Parametry (rozmiar palety)
        templates: Biblioteka, z której pochodzi aktywny szablon

    Returns:
        (nowy stan, zdarzenie lub None)
    """
    active = state.active_template
    if active is None or state.in_inventory:
        return state, None
    template = templates.find(active.template_id)
    if template is None:
        return state, None

    if not active.is_anchored:
        base_color = state.grid.color_at(state.focus)
        if base_color is None:
            return state, None
        updated = ActiveTemplate(
            template_id=active.template_id,
            anchor=state.focus,
            base_color=base_color,
            rotation=state.facing_direction,
            filled_cells=frozenset({state.focus}),
        )
    elif is_template_empty(template, active.anchor, active.rotation, state.grid):
        updated = ActiveTemplate(active.template_id)
    else:
        validation = validate_template(
            template, active.anchor, active.base_color, active.rotation,
            state.grid, params.palette_size,
        )
        completed_at = None
        if validation.is_complete:
            completed_at = active.completed_at_tick
            if completed_at is None:
                completed_at = state.tick
        updated = ActiveTemplate(
            template_id=active.template_id,
            anchor=active.anchor,
            base_color=active.base_color,
            rotation=active.rotation,
            has_errors=validation.has_errors,
            filled_cells=frozenset(validation.correct),
            completed_at_tick=completed_at,
        )

    if updated == active:
        return state, None

    completed = state.completed_templates
    if updated.is_completed:
        completed = completed | {updated.template_id}
    new_state = state.evolve(active_template=updated, completed_templates=completed)
    return new_state, classify_template_change(active, updated)


def template_progress(
    state: GameState,
    params: GameParams,
    templates: TemplateLibrary,
) -> Optional[Dict[str, Any]]:
    """
    Postęp aktywnego szablonu jako słownik JSON (None = brak szablonu).

    Dla zakotwiczonego szablonu zawiera oczekiwane kolory pól
    w świecie (do podświetlenia przez renderer).
    """
    active = state.active_template
    if active is None:
        return None
    template = templates.get(active.template_id)

    progress: Dict[str, Any] = {
        "template_id": active.template_id,
        "anchored": active.is_anchored,
        "has_errors": active.has_errors,
        "filled": len(active.filled_cells),
        "total": len(template.colored_cells),
        "completed_at_tick": active.completed_at_tick,
        "cells": [],
    }
    if active.is_anchored:
        progress["anchor"] = list(active.anchor.axial)
        progress["base_color"] = active.base_color
        progress["rotation"] = active.rotation
        positions = template_cell_positions(
            template, active.anchor, active.base_color, active.rotation,
            params.palette_size,
        )
        progress["cells"] = [
            {"q": pos.q, "r": pos.r, "expected": expected, "actual": state.grid.color_at(pos)}
            for pos, expected in positions
        ]
    return progress
