"""Elves vs Goblins grid battle simulator."""

from .engine import part_one, part_two, run_battle

__all__ = ["part_one", "part_two", "run_battle"]
