"""Static terrain for the battle.

The map only knows about walls and open floor. Which cells are occupied is
always answered by the UnitRegistry, never stored here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from ..utils.constants import OPEN_SYMBOL, WALL_SYMBOL
from ..utils.positions import Position, adjacent4

if TYPE_CHECKING:
    from .registry import UnitRegistry


class Cell(str, Enum):
    """Terrain of a single grid cell."""

    WALL = WALL_SYMBOL
    OPEN = OPEN_SYMBOL


@dataclass(frozen=True)
class BattleMap:
    """Rectangular grid of terrain cells indexed by (row, col)."""

    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self):
        """Validate that the grid is rectangular and non-empty."""
        if not self.cells or not self.cells[0]:
            raise ValueError("BattleMap must have at least one row and one column")
        width = len(self.cells[0])
        for row, line in enumerate(self.cells):
            if len(line) != width:
                raise ValueError(
                    f"Row {row} has {len(line)} cells, expected {width} (map must be rectangular)"
                )

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.height and 0 <= col < self.width

    def cell_at(self, pos: Position) -> Cell:
        """Terrain at a position. Anything off the map counts as wall."""
        if not self.in_bounds(pos):
            return Cell.WALL
        row, col = pos
        return self.cells[row][col]

    def is_open(self, pos: Position) -> bool:
        return self.cell_at(pos) is Cell.OPEN

    def neighbors4(self, pos: Position) -> list[Position]:
        """In-bounds cardinal neighbours of a position, in reading order."""
        return [p for p in adjacent4(pos) if self.in_bounds(p)]

    def iter_cells(self) -> Iterator[tuple[Position, Cell]]:
        """Iterate over all cells in reading order."""
        for row, line in enumerate(self.cells):
            for col, cell in enumerate(line):
                yield (row, col), cell

    def render(self, registry: UnitRegistry | None = None, with_hp: bool = True) -> str:
        """Render the map as text, overlaying living units.

        Each row is followed by the hit points of the units on it, e.g.
        ``#G.E#   G(200), E(197)``.

        Args:
            registry: Units to overlay (terrain only if None)
            with_hp: Append per-row hit point annotations

        Returns:
            Multi-line string snapshot of the battle
        """
        lines = []
        for row, line in enumerate(self.cells):
            chars = []
            row_units = []
            for col, cell in enumerate(line):
                unit = registry.unit_at((row, col)) if registry is not None else None
                if unit is not None:
                    chars.append(unit.faction.value)
                    row_units.append(f"{unit.faction.value}({unit.hp})")
                else:
                    chars.append(cell.value)
            text = "".join(chars)
            if with_hp and row_units:
                text += "   " + ", ".join(row_units)
            lines.append(text)
        return "\n".join(lines)
