"""Battle setup from a text layout.

Layout symbols:
    #  wall
    .  open floor
    E  open floor with an Elf on it
    G  open floor with a Goblin on it
"""

from ..models import Battle, BattleMap, Cell, Faction, Unit, UnitRegistry
from ..utils import (
    DEFAULT_ATTACK_POWER,
    LAYOUT_SYMBOLS,
    STARTING_HP,
    WALL_SYMBOL,
)
from .errors import MalformedLayoutError


def load_battle(
    layout: str,
    elf_attack_power: int = DEFAULT_ATTACK_POWER,
    goblin_attack_power: int = DEFAULT_ATTACK_POWER,
    hit_points: int = STARTING_HP,
) -> Battle:
    """Build a fresh Battle from a layout string.

    The layout is trimmed as a whole and line by line before parsing, so
    indented or padded input is accepted. Units are given ids in reading
    order, numbered per faction ("E-00", "E-01", "G-00", ...).

    Args:
        layout: Rectangular block of layout symbols
        elf_attack_power: Attack power for every Elf
        goblin_attack_power: Attack power for every Goblin
        hit_points: Starting hit points for every unit

    Returns:
        Battle ready for its first round

    Raises:
        MalformedLayoutError: If the layout is empty, rows differ in length,
            or a symbol outside {#, ., E, G} appears
    """
    rows = _split_rows(layout)

    cells: list[tuple[Cell, ...]] = []
    units: list[Unit] = []
    unit_counter = {faction: 0 for faction in Faction}
    attack_power = {Faction.ELF: elf_attack_power, Faction.GOBLIN: goblin_attack_power}

    for row, line in enumerate(rows):
        row_cells = []
        for col, symbol in enumerate(line):
            if symbol not in LAYOUT_SYMBOLS:
                raise MalformedLayoutError(
                    f"Unknown symbol {symbol!r} at row {row}, column {col}"
                )
            if symbol == WALL_SYMBOL:
                row_cells.append(Cell.WALL)
                continue

            row_cells.append(Cell.OPEN)
            if symbol in (Faction.ELF.value, Faction.GOBLIN.value):
                faction = Faction(symbol)
                units.append(
                    Unit(
                        id=f"{faction.value}-{unit_counter[faction]:02d}",
                        faction=faction,
                        position=(row, col),
                        hp=hit_points,
                        attack_power=attack_power[faction],
                    )
                )
                unit_counter[faction] += 1
        cells.append(tuple(row_cells))

    return Battle(
        battle_map=BattleMap(cells=tuple(cells)),
        registry=UnitRegistry(units),
        elf_attack_power=elf_attack_power,
    )


def _split_rows(layout: str) -> list[str]:
    """Trim the layout and check that it is rectangular."""
    rows = [line.strip() for line in layout.strip().splitlines()]
    if not rows or not rows[0]:
        raise MalformedLayoutError("Layout is empty")

    width = len(rows[0])
    for row, line in enumerate(rows):
        if len(line) != width:
            raise MalformedLayoutError(
                f"Row {row} has length {len(line)}, expected {width} (layout must be rectangular)"
            )
    return rows
