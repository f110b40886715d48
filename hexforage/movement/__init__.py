"""
Movement module - ruch protagonisty i focus.

Zawiera:
- can_move / MoveCheck / MoveRejection: Walidacja ruchu
- apply_move / queue_step: Ruch o pole
- set_facing / rotate_facing / move_focus_delta: Kierowanie focusem
- start_auto_move / step_auto_move / cancel_auto_move: Auto-ruch (A*)
- toggle_active_field: Świat <-> inwentarz
"""

from .movement import (
    MoveRejection,
    MoveCheck,
    movement_obstacles,
    can_move,
    update_focus_position,
    set_facing,
    rotate_facing,
    move_focus_delta,
    apply_move,
    queue_step,
    apply_pending_step,
    start_auto_move,
    cancel_auto_move,
    step_auto_move,
    compute_breadcrumbs,
    toggle_active_field,
)

__all__ = [
    "MoveRejection", "MoveCheck", "movement_obstacles", "can_move",
    "update_focus_position", "set_facing", "rotate_facing", "move_focus_delta",
    "apply_move", "queue_step", "apply_pending_step",
    "start_auto_move", "cancel_auto_move", "step_auto_move",
    "compute_breadcrumbs", "toggle_active_field",
]
