"""Data models for the battle simulator."""

from .battle import Battle
from .battle_map import BattleMap, Cell
from .registry import UnitRegistry
from .unit import Faction, Unit

__all__ = [
    "Battle",
    "BattleMap",
    "Cell",
    "Faction",
    "Unit",
    "UnitRegistry",
]
