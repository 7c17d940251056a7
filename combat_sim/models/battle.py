"""Battle state container."""

from dataclasses import dataclass, field

from ..utils.constants import DEFAULT_ATTACK_POWER
from .battle_map import BattleMap
from .registry import UnitRegistry
from .unit import Faction


@dataclass
class Battle:
    """Main battle state container.

    Holds the terrain, the living units, and the number of fully completed
    rounds. All engine logic operates on this state in place.
    """

    battle_map: BattleMap
    registry: UnitRegistry
    rounds: int = 0  # Completed full rounds
    winner: Faction | None = None  # Set once a faction has no living units
    elf_attack_power: int = DEFAULT_ATTACK_POWER
    initial_counts: dict[Faction, int] = field(default_factory=dict)

    def __post_init__(self):
        """Record starting unit counts and validate placement."""
        if self.rounds < 0:
            raise ValueError(f"Invalid rounds: {self.rounds} (must be >= 0)")
        if self.winner is not None and not isinstance(self.winner, Faction):
            raise ValueError(f"Invalid winner: {self.winner!r} (must be a Faction or None)")
        for unit in self.registry.living_units_in_reading_order():
            if not self.battle_map.is_open(unit.position):
                raise ValueError(f"Unit {unit.id} placed on non-open cell {unit.position}")
        if not self.initial_counts:
            self.initial_counts = {faction: self.registry.count(faction) for faction in Faction}

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def elf_losses(self) -> int:
        return self.initial_counts.get(Faction.ELF, 0) - self.registry.count(Faction.ELF)

    def render(self) -> str:
        """Text snapshot of the current battle state."""
        return self.battle_map.render(self.registry)
