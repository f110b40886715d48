"""
Definicje szablonów budowli (BuildTemplate) i ich biblioteka.

Szablon to wzór kolorów do ułożenia w świecie. Komórki są podane
względem kotwicy (0, 0), a kolory względem koloru bazowego - czyli
pierwszego koloru położonego na kotwicy.

FORMAT (data/templates.yaml):
═══════════════════════════════════════════════════════════════════

    templates:
      flower:
        name: {en: Flower, ru: Цветок}
        description: {en: ..., ru: ...}
        difficulty: medium            # easy | medium | hard
        cells:
          - [0, 0, 0]                 # [q, r, relative_color]
          - [0, -1, 25]
          - [1, -1, null]             # null = pole ma zostać puste
        hints:
          en: [...]

    relative_color: przesunięcie na kole palety w procentach (-50..50).
    Kotwica (0, 0) musi istnieć i mieć relative_color 0.

Przykład:
    >>> library = load_default_templates()
    >>> library.get("ring_r1").display_name("ru")
    'Простое кольцо'
    >>> library.get("castle")
    Traceback (most recent call last):
    ValueError: Unknown template: castle. Available: [...]
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from ..core.config_loader import ConfigLoader
from ..core.hex_coord import HexCoord, ORIGIN


RELATIVE_COLOR_LIMIT = 50.0


class Difficulty(Enum):
    """Poziom trudności szablonu."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class TemplateCell:
    """
    Jedna komórka szablonu.

    Attributes:
        offset (HexCoord): Pozycja względem kotwicy (przed obrotem)
        relative_color (Optional[float]): Przesunięcie koloru w % palety,
            None = pole ma zostać puste
    """
    offset: HexCoord
    relative_color: Optional[float]

    @property
    def requires_color(self) -> bool:
        return self.relative_color is not None

    @classmethod
    def from_list(cls, data: List[Any]) -> TemplateCell:
        """Parsuje [q, r, relative_color]."""
        if len(data) != 3:
            raise ValueError(f"Template cell must be [q, r, relative_color], got {data}")
        q, r, relative = data
        if relative is not None:
            relative = float(relative)
            if abs(relative) > RELATIVE_COLOR_LIMIT:
                raise ValueError(
                    f"relative_color must be in [-50, 50], got {relative}"
                )
        return cls(HexCoord(int(q), int(r)), relative)


@dataclass(frozen=True)
class BuildTemplate:
    """
    Niemutowalna definicja szablonu.

    Attributes:
        template_id (str): Klucz w bibliotece
        difficulty (Difficulty): Poziom trudności
        cells (Tuple[TemplateCell, ...]): Komórki (z kotwicą)
        names (Dict[str, str]): Nazwa per język
        descriptions (Dict[str, str]): Opis per język
        hints (Dict[str, Tuple[str, ...]]): Podpowiedzi per język
    """
    template_id: str
    difficulty: Difficulty
    cells: Tuple[TemplateCell, ...]
    names: Dict[str, str] = field(default_factory=dict, compare=False)
    descriptions: Dict[str, str] = field(default_factory=dict, compare=False)
    hints: Dict[str, Tuple[str, ...]] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.cells:
            raise ValueError(f"Template '{self.template_id}' has no cells")

        offsets = [cell.offset for cell in self.cells]
        if len(set(offsets)) != len(offsets):
            raise ValueError(f"Template '{self.template_id}' has duplicate cells")

        anchor = self.anchor_cell
        if anchor is None or anchor.relative_color != 0:
            raise ValueError(
                f"Template '{self.template_id}' needs anchor cell [0, 0, 0]"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # ODCZYT
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def anchor_cell(self) -> Optional[TemplateCell]:
        for cell in self.cells:
            if cell.offset == ORIGIN:
                return cell
        return None

    @property
    def colored_cells(self) -> Tuple[TemplateCell, ...]:
        """Komórki, które mają zostać wypełnione kolorem."""
        return tuple(cell for cell in self.cells if cell.requires_color)

    def display_name(self, language: str = "en") -> str:
        """Nazwa w danym języku (fallback: en, potem ID)."""
        return self.names.get(language) or self.names.get("en") or self.template_id

    def description(self, language: str = "en") -> str:
        return self.descriptions.get(language) or self.descriptions.get("en", "")

    def hints_for(self, language: str = "en") -> Tuple[str, ...]:
        return self.hints.get(language) or self.hints.get("en", ())

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, template_id: str, data: Dict[str, Any]) -> BuildTemplate:
        """
        Tworzy szablon z surowej definicji YAML.

        Raises:
            ValueError: Nieznana trudność lub błędne komórki
        """
        try:
            difficulty = Difficulty(data.get("difficulty", "easy"))
        except ValueError:
            raise ValueError(
                f"Unknown difficulty: {data.get('difficulty')}. "
                f"Available: {[d.value for d in Difficulty]}"
            ) from None

        hints = {
            language: tuple(lines)
            for language, lines in (data.get("hints") or {}).items()
        }
        return cls(
            template_id=template_id,
            difficulty=difficulty,
            cells=tuple(TemplateCell.from_list(cell) for cell in data.get("cells", [])),
            names=dict(data.get("name") or {}),
            descriptions=dict(data.get("description") or {}),
            hints=hints,
        )

    def to_dict(self, language: str = "en") -> Dict[str, Any]:
        """Opis dla API (nazwa i podpowiedzi w jednym języku)."""
        return {
            "id": self.template_id,
            "name": self.display_name(language),
            "description": self.description(language),
            "difficulty": self.difficulty.value,
            "cells": [
                [cell.offset.q, cell.offset.r, cell.relative_color]
                for cell in self.cells
            ],
            "hints": list(self.hints_for(language)),
        }


# ═══════════════════════════════════════════════════════════════════════════
# BIBLIOTEKA
# ═══════════════════════════════════════════════════════════════════════════

class TemplateLibrary:
    """
    Zbiór szablonów indeksowany po ID (kolejność z pliku).

    Example:
        >>> library = TemplateLibrary.from_loader(ConfigLoader())
        >>> library.ids()
        ['ring_r1', 'triangle', 'flower', 'yin_yang']
    """

    def __init__(self, templates: List[BuildTemplate]):
        self._templates: Dict[str, BuildTemplate] = {}
        for template in templates:
            if template.template_id in self._templates:
                raise ValueError(f"Duplicate template id: {template.template_id}")
            self._templates[template.template_id] = template

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, Any]]) -> TemplateLibrary:
        return cls([BuildTemplate.from_dict(tid, raw) for tid, raw in data.items()])

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> TemplateLibrary:
        return cls.from_dict(loader.load_all_templates())

    def get(self, template_id: str) -> BuildTemplate:
        """
        Zwraca szablon po ID.

        Raises:
            ValueError: Jeśli ID nie istnieje w bibliotece
        """
        template = self._templates.get(template_id)
        if template is None:
            raise ValueError(f"Unknown template: {template_id}. "
                             f"Available: {self.ids()}")
        return template

    def find(self, template_id: str) -> Optional[BuildTemplate]:
        return self._templates.get(template_id)

    def ids(self) -> List[str]:
        return list(self._templates.keys())

    def by_difficulty(self, difficulty: Difficulty) -> List[BuildTemplate]:
        return [t for t in self._templates.values() if t.difficulty is difficulty]

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __iter__(self):
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)


@lru_cache(maxsize=1)
def load_default_templates() -> TemplateLibrary:
    """Biblioteka z data/templates.yaml (wczytywana raz)."""
    return TemplateLibrary.from_loader(ConfigLoader())
