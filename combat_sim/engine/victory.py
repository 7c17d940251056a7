"""Battle-over detection and scoring.

This module handles:
1. Checking whether either faction has been wiped out
2. Setting the battle's winner
3. Computing the outcome score (completed rounds x remaining hit points)
"""

from ..models import Battle, Faction


def check_victory(battle: Battle) -> bool:
    """Check whether the battle is over.

    Victory logic:
    - No Goblins left → battle.winner = Faction.ELF
    - No Elves left → battle.winner = Faction.GOBLIN
    - Both factions still standing → battle.winner = None (continue)

    Args:
        battle: Current battle state

    Returns:
        True if the battle has a winner, False otherwise
    """
    elf_count, goblin_count = battle.registry.faction_counts()

    if goblin_count == 0:
        battle.winner = Faction.ELF
        return True
    elif elf_count == 0:
        battle.winner = Faction.GOBLIN
        return True
    else:
        battle.winner = None
        return False


def outcome_score(battle: Battle) -> int:
    """Completed rounds multiplied by the hit points of every surviving unit."""
    return battle.rounds * battle.registry.total_hp()
