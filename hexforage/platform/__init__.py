"""
Platform module - hooki cyklu życia dla platformy hostującej.

Zawiera:
- PlatformIntegration: Bazowa klasa (ABC)
- NullIntegration / EventLogIntegration: Warianty
- INTEGRATION_REGISTRY / get_integration: Wybór wariantu po nazwie
"""

from .integration import (
    PlatformIntegration,
    NullIntegration,
    EventLogIntegration,
    INTEGRATION_REGISTRY,
    get_integration,
)

__all__ = [
    "PlatformIntegration", "NullIntegration", "EventLogIntegration",
    "INTEGRATION_REGISTRY", "get_integration",
]
