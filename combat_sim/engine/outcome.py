"""Battle outcome driver.

Runs rounds until one faction is wiped out and scores the result. Also
hosts the Elf attack power search: replay the battle from scratch with
stronger Elves until they win without a single death.

The search is a linear scan rather than a binary search. Whether "Elves
win with no losses" is monotonic in attack power has not been shown for
every layout (a stronger Elf can change which enemies die first and so
where the survivors end up), so each power is tried in turn.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..models import Battle, Faction
from ..utils.constants import DEFAULT_ATTACK_POWER, MAX_ROUNDS, POWER_SEARCH_START, STARTING_HP
from .errors import NonTerminatingBattleError, PowerSearchExhaustedError
from .layout import load_battle
from .turn_executor import RoundObserver, TurnExecutor
from .victory import outcome_score

logger = logging.getLogger(__name__)


@dataclass
class BattleOutcome:
    """Final state of a battle run.

    Attributes:
        completed_rounds: Number of full rounds before the battle ended
        remaining_hp: Total hit points of all surviving units
        elves_survived: True if no Elf died
        winner: Faction left standing (None only for an aborted run)
        elf_losses: Number of Elves killed
        elf_attack_power: Elf attack power used for this run
        aborted: True if the run was stopped early after an Elf died
    """

    completed_rounds: int
    remaining_hp: int
    elves_survived: bool
    winner: Optional[Faction]
    elf_losses: int
    elf_attack_power: int
    aborted: bool = False

    @property
    def score(self) -> int:
        """Completed rounds multiplied by remaining hit points."""
        return self.completed_rounds * self.remaining_hp

    @property
    def flawless_elf_victory(self) -> bool:
        return self.winner is Faction.ELF and self.elves_survived

    def as_tuple(self) -> tuple[int, int, bool]:
        return self.completed_rounds, self.remaining_hp, self.elves_survived


def simulate(
    battle: Battle,
    *,
    observer: Optional[RoundObserver] = None,
    max_rounds: int = MAX_ROUNDS,
    stop_on_elf_death: bool = False,
) -> BattleOutcome:
    """Run an already loaded battle until it ends.

    Args:
        battle: Freshly loaded (or partially run) battle, mutated in place
        observer: Optional round observer passed to the TurnExecutor
        max_rounds: Round cap; exceeding it is treated as an engine defect
        stop_on_elf_death: Stop as soon as a round ends with an Elf dead

    Returns:
        BattleOutcome for the finished (or aborted) battle

    Raises:
        NonTerminatingBattleError: If the battle is still going after max_rounds
    """
    executor = TurnExecutor(observer=observer)
    aborted = False

    while not battle.is_over:
        executor.execute_round(battle)

        if battle.is_over:
            break
        if stop_on_elf_death and battle.elf_losses > 0:
            aborted = True
            break
        if battle.rounds >= max_rounds:
            raise NonTerminatingBattleError(
                f"Battle still running after {max_rounds} rounds "
                f"(elves={battle.registry.count(Faction.ELF)}, "
                f"goblins={battle.registry.count(Faction.GOBLIN)})"
            )

    outcome = BattleOutcome(
        completed_rounds=battle.rounds,
        remaining_hp=battle.registry.total_hp(),
        elves_survived=battle.elf_losses == 0,
        winner=battle.winner,
        elf_losses=battle.elf_losses,
        elf_attack_power=battle.elf_attack_power,
        aborted=aborted,
    )
    if aborted:
        logger.debug(
            f"Elf power {battle.elf_attack_power}: aborted after round {battle.rounds} "
            f"({battle.elf_losses} elf losses)"
        )
    else:
        winner = battle.winner.name.lower() if battle.winner is not None else "nobody"
        logger.debug(
            f"Battle over after {outcome.completed_rounds} full rounds: {winner} win "
            f"with {outcome.remaining_hp} hp left (score {outcome_score(battle)})"
        )
    return outcome


def run_battle(
    layout: str,
    elf_attack_power: int = DEFAULT_ATTACK_POWER,
    *,
    observer: Optional[RoundObserver] = None,
    max_rounds: int = MAX_ROUNDS,
    stop_on_elf_death: bool = False,
) -> BattleOutcome:
    """Load a layout and fight the battle to the end.

    Args:
        layout: Layout text
        elf_attack_power: Attack power for the Elves (Goblins always use the default)
        observer: Optional round observer
        max_rounds: Round cap
        stop_on_elf_death: Abort the run once an Elf has died

    Returns:
        BattleOutcome for the run

    Raises:
        MalformedLayoutError: If the layout can't be parsed
        NonTerminatingBattleError: If the battle exceeds max_rounds
    """
    battle = load_battle(layout, elf_attack_power=elf_attack_power)
    return simulate(
        battle,
        observer=observer,
        max_rounds=max_rounds,
        stop_on_elf_death=stop_on_elf_death,
    )


def find_minimum_elf_power(
    layout: str,
    start_power: int = POWER_SEARCH_START,
    max_power: Optional[int] = None,
    *,
    observer: Optional[RoundObserver] = None,
    max_rounds: int = MAX_ROUNDS,
) -> BattleOutcome:
    """Find the weakest Elves that win without losing anyone.

    Each candidate power gets a freshly loaded battle. Runs are cut short
    as soon as an Elf dies, since such a run can never qualify.

    Once Elf power reaches the Goblins' starting hit points every hit is a
    kill, so raising it further cannot change the battle. That value is the
    default upper bound.

    Args:
        layout: Layout text
        start_power: First Elf attack power to try
        max_power: Last Elf attack power to try (inclusive)
        observer: Optional round observer, shared by every attempt
        max_rounds: Round cap for each attempt

    Returns:
        BattleOutcome of the first flawless Elf victory

    Raises:
        PowerSearchExhaustedError: If no power up to max_power works
    """
    if max_power is None:
        max_power = max(start_power, STARTING_HP)

    for power in range(start_power, max_power + 1):
        outcome = run_battle(
            layout,
            elf_attack_power=power,
            observer=observer,
            max_rounds=max_rounds,
            stop_on_elf_death=True,
        )
        if outcome.flawless_elf_victory:
            logger.info(f"Elf power {power}: flawless victory (score {outcome.score})")
            return outcome
        logger.info(f"Elf power {power}: {outcome.elf_losses} elf losses, trying next power")

    raise PowerSearchExhaustedError(
        f"No Elf attack power between {start_power} and {max_power} wins without losses"
    )


def part_one(layout: str) -> int:
    """Outcome score with default attack powers on both sides."""
    return run_battle(layout).score


def part_two(layout: str) -> int:
    """Outcome score with the weakest Elves that win without losses."""
    return find_minimum_elf_power(layout).score
