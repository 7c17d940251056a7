"""Engine-level exceptions."""


class BattleError(Exception):
    """Base exception for the battle engine."""


class MalformedLayoutError(BattleError, ValueError):
    """Raised when a layout is empty, not rectangular, or has unknown symbols."""


class NonTerminatingBattleError(BattleError):
    """Raised when a battle exceeds its round cap without a winner."""


class PowerSearchExhaustedError(BattleError):
    """Raised when no Elf attack power up to the search limit wins without losses."""
