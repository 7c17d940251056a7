"""Round-by-round battle trace.

RoundLogger is a TurnExecutor observer. After every round it logs a text
snapshot of the map at DEBUG level, keeps a summary in memory, and can
append the same summary as a JSON line to a trace file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..engine.turn_executor import RoundResult
from ..models import Battle, Faction

logger = logging.getLogger(__name__)


class RoundLogger:
    """Records a summary of each round and logs map snapshots."""

    def __init__(self, output_path: Optional[str] = None, snapshots: bool = True):
        """Initialize round logger.

        Args:
            output_path: JSONL file to append round summaries to (None for memory only)
            snapshots: Log a rendered map after each round at DEBUG level
        """
        self.snapshots = snapshots
        self.history: list[dict[str, Any]] = []
        self.output_path = Path(output_path) if output_path else None
        self.file_handle = None

        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                self.file_handle = open(self.output_path, "a", encoding="utf-8")
            except OSError as e:
                raise OSError(f"Failed to open trace file {self.output_path}: {e}") from e

    def __call__(self, battle: Battle, result: RoundResult) -> None:
        """Observer entry point invoked by TurnExecutor."""
        entry = self.summarize(battle, result)
        self.history.append(entry)

        if self.snapshots:
            label = "After" if result.completed else "Ended during"
            logger.debug(f"{label} round {result.round_number}:\n{battle.render()}")

        if self.file_handle is not None:
            self.file_handle.write(json.dumps(entry) + "\n")
            self.file_handle.flush()

    @staticmethod
    def summarize(battle: Battle, result: RoundResult) -> dict[str, Any]:
        """Build a JSON-compatible summary of a round."""
        elf_count, goblin_count = battle.registry.faction_counts()
        return {
            "round": result.round_number,
            "completed": result.completed,
            "elf_attack_power": battle.elf_attack_power,
            "moves": [
                {"unit": m.unit_id, "from": list(m.origin), "to": list(m.dest)}
                for m in result.moves
            ],
            "attacks": [
                {
                    "attacker": a.attacker_id,
                    "target": a.target_id,
                    "damage": a.damage,
                    "target_hp": a.target_hp,
                }
                for a in result.attacks
            ],
            "deaths": list(result.deaths),
            "units": {Faction.ELF.name.lower(): elf_count, Faction.GOBLIN.name.lower(): goblin_count},
            "total_hp": battle.registry.total_hp(),
        }

    def close(self) -> None:
        """Close the trace file, if one is open."""
        if self.file_handle is not None:
            self.file_handle.close()
            self.file_handle = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
