"""Battle configuration constants."""

# Unit stats
STARTING_HP = 200
DEFAULT_ATTACK_POWER = 3

# Power search
POWER_SEARCH_START = 4  # Lowest Elf attack power worth trying after the default

# Safety valve for the round loop
MAX_ROUNDS = 100_000

# Layout symbols
WALL_SYMBOL = "#"
OPEN_SYMBOL = "."
ELF_SYMBOL = "E"
GOBLIN_SYMBOL = "G"
LAYOUT_SYMBOLS = frozenset({WALL_SYMBOL, OPEN_SYMBOL, ELF_SYMBOL, GOBLIN_SYMBOL})
