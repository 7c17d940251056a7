"""Report schemas."""

from .reports import BattleReport, SimulationReport

__all__ = ["BattleReport", "SimulationReport"]
