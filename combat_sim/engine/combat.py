"""Turn step 2: Attack resolution.

This module handles:
1. Finding living enemies adjacent to the acting unit
2. Choosing the weakest one (ties broken by reading order)
3. Applying damage and removing the target if it dies
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..models import Battle, BattleMap, Unit, UnitRegistry
from ..utils.positions import reading_order

logger = logging.getLogger(__name__)


@dataclass
class AttackEvent:
    """Record of a single attack.

    Attributes:
        attacker_id: ID of the attacking unit
        target_id: ID of the unit that was hit
        damage: Hit points actually removed from the target
        target_hp: Target hit points after the attack
        killed: True if the attack reduced the target to 0 hp
    """

    attacker_id: str
    target_id: str
    damage: int
    target_hp: int
    killed: bool


def select_target(battle_map: BattleMap, registry: UnitRegistry, unit: Unit) -> Optional[Unit]:
    """Adjacent living enemy with the fewest hit points.

    Ties are broken by the reading order of the enemies' positions.

    Args:
        battle_map: Terrain (for bounds)
        registry: Living units
        unit: The attacking unit

    Returns:
        Unit to attack, or None if no enemy is adjacent
    """
    adjacent_enemies = []
    for neighbor in battle_map.neighbors4(unit.position):
        other = registry.unit_at(neighbor)
        if other is not None and other.is_enemy_of(unit):
            adjacent_enemies.append(other)

    if not adjacent_enemies:
        return None

    return min(adjacent_enemies, key=lambda e: (e.hp, reading_order(e.position)))


def process_unit_attack(battle: Battle, unit: Unit) -> Optional[AttackEvent]:
    """Execute the attack part of a unit's turn.

    Args:
        battle: Current battle state
        unit: Living unit taking its turn (after its move, if any)

    Returns:
        AttackEvent if the unit attacked, None if no enemy was in range
    """
    target = select_target(battle.battle_map, battle.registry, unit)
    if target is None:
        return None

    damage = battle.registry.apply_damage(target.id, unit.attack_power)
    killed = not battle.registry.is_alive(target.id)

    if killed:
        logger.debug(f"{unit.id} kills {target.id} at {target.position}")
    else:
        logger.debug(f"{unit.id} hits {target.id} for {damage} ({target.hp} hp left)")

    return AttackEvent(
        attacker_id=unit.id,
        target_id=target.id,
        damage=damage,
        target_hp=target.hp,
        killed=killed,
    )
