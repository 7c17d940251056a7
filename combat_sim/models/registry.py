"""Registry of living units and the occupancy view derived from it."""

from typing import Iterable, Optional

from ..utils.positions import Position, manhattan_distance, reading_order
from .unit import Faction, Unit


class UnitRegistry:
    """Holds every living unit, indexed by id and by position.

    The position index is the single source of truth for occupancy. It is
    updated together with each move and each death, so the map never has to
    track who stands where.
    """

    def __init__(self, units: Iterable[Unit] = ()):
        """Register the initial units.

        Args:
            units: Units placed at load time

        Raises:
            ValueError: If two units share an id or a position, or a unit is dead
        """
        self._units: dict[str, Unit] = {}
        self._positions: dict[Position, str] = {}
        self.fallen: list[Unit] = []  # Units removed after dying, in order of death

        for unit in units:
            if not unit.is_alive:
                raise ValueError(f"Unit {unit.id} registered with no hit points")
            if unit.id in self._units:
                raise ValueError(f"Duplicate unit id: {unit.id}")
            if unit.position in self._positions:
                raise ValueError(
                    f"Units {self._positions[unit.position]} and {unit.id} "
                    f"share position {unit.position}"
                )
            self._units[unit.id] = unit
            self._positions[unit.position] = unit.id

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, unit_id: str) -> bool:
        return unit_id in self._units

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def living_units_in_reading_order(self) -> list[Unit]:
        return sorted(self._units.values(), key=lambda u: reading_order(u.position))

    def get(self, unit_id: str) -> Optional[Unit]:
        """Living unit with the given id, or None if it died (or never existed)."""
        return self._units.get(unit_id)

    def is_alive(self, unit_id: str) -> bool:
        return unit_id in self._units

    def unit_at(self, pos: Position) -> Optional[Unit]:
        unit_id = self._positions.get(pos)
        return self._units[unit_id] if unit_id is not None else None

    def is_occupied(self, pos: Position) -> bool:
        return pos in self._positions

    def count(self, faction: Faction) -> int:
        return sum(1 for u in self._units.values() if u.faction is faction)

    def faction_counts(self) -> tuple[int, int]:
        """Living unit counts as (elf_count, goblin_count)."""
        return self.count(Faction.ELF), self.count(Faction.GOBLIN)

    def enemies_of(self, faction: Faction) -> list[Unit]:
        """Living units of the opposing faction, in reading order."""
        return [u for u in self.living_units_in_reading_order() if u.faction is faction.enemy]

    def has_enemies(self, faction: Faction) -> bool:
        return any(u.faction is faction.enemy for u in self._units.values())

    def total_hp(self) -> int:
        return sum(u.hp for u in self._units.values())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def move(self, unit_id: str, dest: Position) -> None:
        """Step a living unit into an adjacent, unoccupied cell.

        Terrain is checked by the caller; this keeps the position index in
        step with the unit.
        """
        unit = self._units[unit_id]
        assert manhattan_distance(unit.position, dest) == 1, (
            f"Unit {unit_id} cannot step from {unit.position} to non-adjacent {dest}"
        )
        assert dest not in self._positions, (
            f"Unit {unit_id} cannot step onto {dest}, occupied by {self._positions[dest]}"
        )

        del self._positions[unit.position]
        unit.position = dest
        self._positions[dest] = unit_id

    def apply_damage(self, unit_id: str, amount: int) -> int:
        """Reduce a unit's hit points, removing it the moment it dies.

        Args:
            unit_id: ID of the unit being hit
            amount: Attack power of the hit

        Returns:
            Hit points actually removed (never more than the unit had)
        """
        unit = self._units[unit_id]
        damage = min(amount, unit.hp)
        unit.hp -= damage

        if unit.hp == 0:
            del self._units[unit_id]
            del self._positions[unit.position]
            self.fallen.append(unit)

        return damage
