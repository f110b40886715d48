"""
Dopasowanie szablonu do siatki świata.

Zakotwiczony szablon ma trzy parametry:
    anchor      Pozycja kotwicy w świecie
    base_color  Kolor położony na kotwicy
    rotation    Obrót 0..5 (kierunek patrzenia przy zakotwiczeniu)

KOLOR BEZWZGLĘDNY:
═══════════════════════════════════════════════════════════════════

    offset   = round(relative_color / 100 * palette_size)
    absolute = (base_color + offset) mod palette_size

    Przy 8 kolorach: 25% = 2 kroki, 50% = kolor przeciwny (4 kroki),
    12.5% = 1 krok. Zaokrąglenie połówek w górę.

POZYCJA W ŚWIECIE:
═══════════════════════════════════════════════════════════════════

    world = anchor + offset.rotate(rotation)

    Obrót o 1 krok przenosi kierunek i na i+1, więc szablon
    zakotwiczony przy facing = 2 jest obrócony o 120° zgodnie z zegarem.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import math

from ..core.hex_coord import HexCoord
from ..core.hex_grid import HexGrid
from .template import BuildTemplate, TemplateCell


def absolute_color(relative_color: float, base_color: int, palette_size: int) -> int:
    """Indeks palety dla koloru względnego."""
    offset = math.floor(relative_color / 100 * palette_size + 0.5)
    return (base_color + offset) % palette_size


def cell_world_position(cell: TemplateCell, anchor: HexCoord, rotation: int) -> HexCoord:
    return anchor + cell.offset.rotate(rotation)


def template_cell_positions(
    template: BuildTemplate,
    anchor: HexCoord,
    base_color: int,
    rotation: int,
    palette_size: int,
) -> List[Tuple[HexCoord, Optional[int]]]:
    """
    Pozycje komórek w świecie z oczekiwanym kolorem.

    Returns:
        List[(pozycja, kolor)]: kolor None = pole ma być puste
    """
    result = []
    for cell in template.cells:
        expected = None
        if cell.requires_color:
            expected = absolute_color(cell.relative_color, base_color, palette_size)
        result.append((cell_world_position(cell, anchor, rotation), expected))
    return result


@dataclass(frozen=True)
class TemplateValidation:
    """
    Wynik porównania szablonu z siatką.

    Pola do wypełnienia dzielą się na trzy rozłączne grupy. Pola, które
    mają zostać puste, nie są sprawdzane.
    """
    correct: Tuple[HexCoord, ...]
    incorrect: Tuple[HexCoord, ...]
    empty: Tuple[HexCoord, ...]

    @property
    def has_errors(self) -> bool:
        return bool(self.incorrect)

    @property
    def is_complete(self) -> bool:
        return not self.incorrect and not self.empty and bool(self.correct)


def validate_template(
    template: BuildTemplate,
    anchor: HexCoord,
    base_color: int,
    rotation: int,
    grid: HexGrid,
    palette_size: int,
) -> TemplateValidation:
    """Porównuje zakotwiczony szablon z siatką (pola poza siatką = puste)."""
    correct, incorrect, empty = [], [], []
    positions = template_cell_positions(template, anchor, base_color, rotation, palette_size)
    for position, expected in positions:
        if expected is None:
            continue
        actual = grid.color_at(position)
        if actual is None:
            empty.append(position)
        elif actual == expected:
            correct.append(position)
        else:
            incorrect.append(position)
    return TemplateValidation(tuple(correct), tuple(incorrect), tuple(empty))


def is_template_completed(
    template: BuildTemplate,
    anchor: HexCoord,
    base_color: int,
    rotation: int,
    grid: HexGrid,
    palette_size: int,
) -> bool:
    return validate_template(
        template, anchor, base_color, rotation, grid, palette_size
    ).is_complete


def is_template_empty(
    template: BuildTemplate,
    anchor: HexCoord,
    rotation: int,
    grid: HexGrid,
) -> bool:
    """True jeśli żadne pole do wypełnienia nie ma koloru."""
    return not any(
        grid.is_colored(cell_world_position(cell, anchor, rotation))
        for cell in template.colored_cells
    )
