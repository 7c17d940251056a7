"""Turn step 1: Unit movement.

This module handles:
1. Skipping movement for units already in range of an enemy
2. Asking the pathfinder for the next step toward the chosen target cell
3. Updating the unit registry (the occupancy view) with the new position
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..models import Battle, Unit
from ..utils.positions import Position
from .pathfinder import choose_step

logger = logging.getLogger(__name__)


@dataclass
class MoveEvent:
    """Record of a unit stepping to an adjacent cell.

    Attributes:
        unit_id: ID of the unit that moved
        origin: Position before the step
        dest: Position after the step
    """

    unit_id: str
    origin: Position
    dest: Position


def process_unit_movement(battle: Battle, unit: Unit) -> Optional[MoveEvent]:
    """Execute the movement part of a unit's turn.

    Args:
        battle: Current battle state
        unit: Living unit taking its turn

    Returns:
        MoveEvent if the unit moved, None if it stayed put
    """
    step = choose_step(battle.battle_map, battle.registry, unit)
    if step is None:
        return None

    origin = unit.position
    battle.registry.move(unit.id, step)
    logger.debug(f"{unit.id} moves {origin} -> {step}")

    return MoveEvent(unit_id=unit.id, origin=origin, dest=step)
