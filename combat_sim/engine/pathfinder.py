"""Breadth-first movement planning.

A unit picks where to step in two passes:
1. Search outward from the unit and find the closest cell that is in range
   of an enemy. Ties go to the first such cell in reading order.
2. Search outward from that chosen cell and rank the unit's own open
   neighbours by their distance to it. Ties again go to reading order.

Both searches only cross open cells that no living unit stands on.
"""

from collections import deque
from typing import Optional

from ..models import BattleMap, Unit, UnitRegistry
from ..utils.positions import Position, reading_order


def is_passable(battle_map: BattleMap, registry: UnitRegistry, pos: Position) -> bool:
    """Whether a unit may walk through a cell right now."""
    return battle_map.is_open(pos) and not registry.is_occupied(pos)


def distance_map(
    battle_map: BattleMap, registry: UnitRegistry, origin: Position
) -> dict[Position, int]:
    """BFS step counts from origin to every reachable passable cell.

    The origin itself is included at distance 0 whether or not it is
    occupied, so a search can start from a unit's own cell.

    Args:
        battle_map: Terrain
        registry: Living units (occupied cells block the search)
        origin: Start of the search

    Returns:
        Mapping of reachable position to its distance from origin
    """
    distances = {origin: 0}
    frontier = deque([origin])

    while frontier:
        pos = frontier.popleft()
        next_distance = distances[pos] + 1
        for neighbor in battle_map.neighbors4(pos):
            if neighbor in distances or not is_passable(battle_map, registry, neighbor):
                continue
            distances[neighbor] = next_distance
            frontier.append(neighbor)

    return distances


def in_range(battle_map: BattleMap, registry: UnitRegistry, unit: Unit) -> bool:
    """Whether the unit is already next to at least one living enemy."""
    for neighbor in battle_map.neighbors4(unit.position):
        other = registry.unit_at(neighbor)
        if other is not None and other.is_enemy_of(unit):
            return True
    return False


def candidate_targets(
    battle_map: BattleMap, registry: UnitRegistry, unit: Unit
) -> set[Position]:
    """Open, unoccupied cells adjacent to any living enemy of the unit."""
    targets = set()
    for enemy in registry.enemies_of(unit.faction):
        for neighbor in battle_map.neighbors4(enemy.position):
            if is_passable(battle_map, registry, neighbor):
                targets.add(neighbor)
    return targets


def choose_destination(
    battle_map: BattleMap, registry: UnitRegistry, unit: Unit
) -> Optional[Position]:
    """Nearest reachable candidate target cell, ties broken by reading order."""
    targets = candidate_targets(battle_map, registry, unit)
    if not targets:
        return None

    distances = distance_map(battle_map, registry, unit.position)
    reachable = [t for t in targets if t in distances]
    if not reachable:
        return None

    return min(reachable, key=lambda t: (distances[t], reading_order(t)))


def choose_step(
    battle_map: BattleMap, registry: UnitRegistry, unit: Unit
) -> Optional[Position]:
    """Adjacent cell the unit should step into this turn.

    Args:
        battle_map: Terrain
        registry: Living units
        unit: The unit taking its turn

    Returns:
        Position to move to, or None if the unit is already in range of an
        enemy or no candidate target can be reached
    """
    if in_range(battle_map, registry, unit):
        return None

    destination = choose_destination(battle_map, registry, unit)
    if destination is None:
        return None

    distances = distance_map(battle_map, registry, destination)
    steps = [
        pos
        for pos in battle_map.neighbors4(unit.position)
        if pos in distances and is_passable(battle_map, registry, pos)
    ]
    assert steps, f"Unit {unit.id} reached {destination} but has no step toward it"

    step = min(steps, key=lambda pos: (distances[pos], reading_order(pos)))
    assert is_passable(battle_map, registry, step), f"Step {step} for {unit.id} is blocked"
    return step
