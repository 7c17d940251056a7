"""Pydantic report schemas for command-line output."""

from pydantic import BaseModel, Field

from ..engine.outcome import BattleOutcome


class BattleReport(BaseModel):
    """Result of a single battle run."""

    rounds: int = Field(ge=0, description="Completed full rounds")
    remaining_hp: int = Field(ge=0, description="Total hit points of surviving units")
    score: int = Field(ge=0, description="rounds x remaining_hp")
    winner: str | None = Field(default=None, description="'elf', 'goblin', or None")
    elf_attack_power: int = Field(gt=0)
    elf_losses: int = Field(ge=0)

    @classmethod
    def from_outcome(cls, outcome: BattleOutcome) -> "BattleReport":
        return cls(
            rounds=outcome.completed_rounds,
            remaining_hp=outcome.remaining_hp,
            score=outcome.score,
            winner=outcome.winner.name.lower() if outcome.winner is not None else None,
            elf_attack_power=outcome.elf_attack_power,
            elf_losses=outcome.elf_losses,
        )


class SimulationReport(BaseModel):
    """Answers for one layout, as printed by ``battle.py --json``."""

    layout: str = Field(description="Layout file name, or '-' for stdin")
    part_one: BattleReport | None = None
    part_two: BattleReport | None = None
    timings: dict[str, float] = Field(
        default_factory=dict, description="Elapsed seconds per part (with --show-time)"
    )
