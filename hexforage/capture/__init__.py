"""
Capture module - maszyna stanów przechwycenia koloru.

Zawiera:
- CapturePhase / capture_phase: Faza wyliczana ze snapshotu
- can_capture / CaptureCheck / CaptureRejection: Walidacja z powodem
- start_action_mode / end_action_mode / resolve_capture: Tranzycje
- drop_carried: Odłożenie przenoszonego koloru
- capture_chance_percent / palette_distance: Szansa przechwycenia
"""

from .capture import (
    CapturePhase,
    CaptureRejection,
    CaptureCheck,
    palette_distance,
    capture_chance_percent,
    hold_duration_ticks,
    can_capture,
    capture_phase,
    is_charge_complete,
    preview_capture_chance,
    is_carry_flicker_on,
    start_action_mode,
    end_action_mode,
    resolve_capture,
    can_drop,
    drop_carried,
    clear_expired_flash,
)

__all__ = [
    "CapturePhase", "CaptureRejection", "CaptureCheck",
    "palette_distance", "capture_chance_percent", "hold_duration_ticks",
    "can_capture", "capture_phase", "is_charge_complete",
    "preview_capture_chance", "is_carry_flicker_on",
    "start_action_mode", "end_action_mode", "resolve_capture",
    "can_drop", "drop_carried", "clear_expired_flash",
]
