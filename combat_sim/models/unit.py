"""Unit data model for combatants on the battle map."""

from dataclasses import dataclass
from enum import Enum

from ..utils.constants import ELF_SYMBOL, GOBLIN_SYMBOL
from ..utils.positions import Position


class Faction(str, Enum):
    """Side a unit fights for. The value is the unit's layout symbol."""

    ELF = ELF_SYMBOL
    GOBLIN = GOBLIN_SYMBOL

    @property
    def enemy(self) -> "Faction":
        """The opposing faction."""
        return Faction.GOBLIN if self is Faction.ELF else Faction.ELF


@dataclass
class Unit:
    """A single Elf or Goblin.

    Units are created once when the layout is loaded. Hit points are reduced
    by attacks and position changes only during the movement phase.
    """

    id: str  # Stable identifier (e.g., "E-01")
    faction: Faction
    position: Position  # (row, col)
    hp: int
    attack_power: int

    def __post_init__(self):
        """Validate unit data after initialization."""
        if not isinstance(self.faction, Faction):
            raise ValueError(f"Invalid faction: {self.faction!r} (must be a Faction)")
        if self.hp < 0:
            raise ValueError(f"Invalid hp: {self.hp} (must be >= 0)")
        if self.attack_power <= 0:
            raise ValueError(f"Invalid attack_power: {self.attack_power} (must be > 0)")
        row, col = self.position
        if row < 0 or col < 0:
            raise ValueError(f"Invalid position: {self.position} (must be non-negative)")

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def is_enemy_of(self, other: "Unit") -> bool:
        return self.faction is not other.faction
