"""Round execution orchestrator.

A round is one pass over every unit that was alive when the round started,
in reading order. Each unit's turn is:
1. Target check (no enemies left → the round is abandoned, battle over)
2. Movement
3. Attack

The completed-round counter increments only when every unit in the
snapshot has had its turn. A round cut short because one faction ran out
of enemies does not count.

Architecture:
Each turn step is an independent method. execute_round composes them in
order and reports what happened through a RoundResult, which is also handed
to the optional observer at every round boundary.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..models import Battle, Unit
from ..utils.positions import Position
from .combat import AttackEvent, process_unit_attack
from .movement import MoveEvent, process_unit_movement
from .victory import check_victory

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    """Everything that happened during one round.

    Attributes:
        round_number: 1-based index of the round that was attempted
        completed: False if the round was abandoned because a unit found no enemies
        acting_order: (unit_id, position) of each unit that took a turn, at turn start
        moves: Movement events in turn order
        attacks: Attack events in turn order
        deaths: IDs of units killed this round, in order of death
    """

    round_number: int
    completed: bool = False
    acting_order: list[tuple[str, Position]] = field(default_factory=list)
    moves: list[MoveEvent] = field(default_factory=list)
    attacks: list[AttackEvent] = field(default_factory=list)
    deaths: list[str] = field(default_factory=list)

    @property
    def damage_dealt(self) -> int:
        return sum(attack.damage for attack in self.attacks)


RoundObserver = Callable[[Battle, RoundResult], None]


class TurnExecutor:
    """Runs battle rounds one at a time.

    Args:
        observer: Optional callback invoked with (battle, round_result) after
            every round, including a final abandoned round
    """

    def __init__(self, observer: Optional[RoundObserver] = None):
        self.observer = observer

    # =========================================================================
    # TURN STEP METHODS
    # =========================================================================

    def execute_movement(self, battle: Battle, unit: Unit) -> Optional[MoveEvent]:
        """Move the unit one step toward the nearest reachable enemy, if needed."""
        return process_unit_movement(battle, unit)

    def execute_attack(self, battle: Battle, unit: Unit) -> Optional[AttackEvent]:
        """Attack the weakest adjacent enemy, if any."""
        return process_unit_attack(battle, unit)

    def execute_turn(self, battle: Battle, unit: Unit, result: RoundResult) -> bool:
        """Execute one unit's turn.

        Args:
            battle: Current battle state
            unit: Living unit whose turn it is
            result: Round record to append events to

        Returns:
            False if the unit found no enemies (battle over), True otherwise
        """
        if not battle.registry.has_enemies(unit.faction):
            return False

        result.acting_order.append((unit.id, unit.position))

        move = self.execute_movement(battle, unit)
        if move is not None:
            result.moves.append(move)

        attack = self.execute_attack(battle, unit)
        if attack is not None:
            result.attacks.append(attack)
            if attack.killed:
                result.deaths.append(attack.target_id)

        return True

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def execute_round(self, battle: Battle) -> RoundResult:
        """Execute one full round of the battle.

        Args:
            battle: Current battle state (mutated in place)

        Returns:
            RoundResult describing the round. If completed is False the battle
            ended part-way through and battle.winner is set.
        """
        result = RoundResult(round_number=battle.rounds + 1)

        if check_victory(battle):
            self._notify(battle, result)
            return result

        # Snapshot ids so deaths and moves during the round don't reorder turns
        turn_order = [u.id for u in battle.registry.living_units_in_reading_order()]

        for unit_id in turn_order:
            unit = battle.registry.get(unit_id)
            if unit is None:
                continue  # Killed earlier this round

            if not self.execute_turn(battle, unit, result):
                check_victory(battle)
                logger.debug(
                    f"Round {result.round_number} abandoned: {unit_id} has no enemies left"
                )
                self._notify(battle, result)
                return result

        battle.rounds += 1
        result.completed = True
        check_victory(battle)

        logger.debug(
            f"Round {result.round_number} complete: {len(result.moves)} moves, "
            f"{len(result.attacks)} attacks, {len(result.deaths)} deaths"
        )
        self._notify(battle, result)
        return result

    def _notify(self, battle: Battle, result: RoundResult) -> None:
        if self.observer is not None:
            self.observer(battle, result)
