"""Utility functions and constants for the battle simulator."""

from .constants import (
    DEFAULT_ATTACK_POWER,
    ELF_SYMBOL,
    GOBLIN_SYMBOL,
    LAYOUT_SYMBOLS,
    MAX_ROUNDS,
    OPEN_SYMBOL,
    POWER_SEARCH_START,
    STARTING_HP,
    WALL_SYMBOL,
)
from .positions import CARDINAL_OFFSETS, Position, adjacent4, manhattan_distance, reading_order

__all__ = [
    "DEFAULT_ATTACK_POWER",
    "ELF_SYMBOL",
    "GOBLIN_SYMBOL",
    "LAYOUT_SYMBOLS",
    "MAX_ROUNDS",
    "OPEN_SYMBOL",
    "POWER_SEARCH_START",
    "STARTING_HP",
    "WALL_SYMBOL",
    "CARDINAL_OFFSETS",
    "Position",
    "adjacent4",
    "manhattan_distance",
    "reading_order",
]
