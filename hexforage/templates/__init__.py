"""
Templates module - szablony budowli (wzory kolorów do ułożenia w świecie).

Zawiera:
- BuildTemplate / TemplateCell / Difficulty: Definicje z data/templates.yaml
- TemplateLibrary / load_default_templates: Biblioteka szablonów
- absolute_color / validate_template: Dopasowanie do siatki
- activate_template / update_template_state: Śledzenie postępu
"""

from .template import (
    Difficulty,
    TemplateCell,
    BuildTemplate,
    TemplateLibrary,
    load_default_templates,
)
from .matching import (
    TemplateValidation,
    absolute_color,
    cell_world_position,
    template_cell_positions,
    validate_template,
    is_template_completed,
    is_template_empty,
)
from .tracker import (
    TemplateEvent,
    activate_template,
    deactivate_template,
    classify_template_change,
    update_template_state,
    template_progress,
)

__all__ = [
    "Difficulty", "TemplateCell", "BuildTemplate", "TemplateLibrary",
    "load_default_templates",
    "TemplateValidation", "absolute_color", "cell_world_position",
    "template_cell_positions", "validate_template", "is_template_completed",
    "is_template_empty",
    "TemplateEvent", "activate_template", "deactivate_template",
    "classify_template_change", "update_template_state", "template_progress",
]
