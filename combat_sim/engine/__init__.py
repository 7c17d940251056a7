"""Battle engine components."""

from .errors import (
    BattleError,
    MalformedLayoutError,
    NonTerminatingBattleError,
    PowerSearchExhaustedError,
)
from .layout import load_battle
from .outcome import (
    BattleOutcome,
    find_minimum_elf_power,
    part_one,
    part_two,
    run_battle,
    simulate,
)
from .turn_executor import RoundResult, TurnExecutor

__all__ = [
    "BattleError",
    "MalformedLayoutError",
    "NonTerminatingBattleError",
    "PowerSearchExhaustedError",
    "load_battle",
    "BattleOutcome",
    "find_minimum_elf_power",
    "part_one",
    "part_two",
    "run_battle",
    "simulate",
    "RoundResult",
    "TurnExecutor",
]
