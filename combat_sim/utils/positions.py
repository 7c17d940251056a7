"""Grid positions and reading order."""

Position = tuple[int, int]  # (row, col)

# Cardinal offsets listed in reading order: up, left, right, down
CARDINAL_OFFSETS: tuple[Position, ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))


def reading_order(pos: Position) -> Position:
    """Sort key for reading order (top-to-bottom, then left-to-right).

    Positions are already stored as (row, col), so the key is the position
    itself. Using this function at call sites keeps the tie-break explicit.

    Args:
        pos: Grid position as (row, col)

    Returns:
        The reading-order sort key

    Examples:
        >>> sorted([(2, 0), (1, 5), (1, 2)], key=reading_order)
        [(1, 2), (1, 5), (2, 0)]
    """
    return pos


def adjacent4(pos: Position) -> list[Position]:
    """Return the four cardinal neighbours of a position in reading order.

    No bounds checking is done here; see BattleMap.neighbors4.

    Args:
        pos: Grid position as (row, col)

    Returns:
        List of up to four neighbouring positions
    """
    row, col = pos
    return [(row + dr, col + dc) for dr, dc in CARDINAL_OFFSETS]


def manhattan_distance(a: Position, b: Position) -> int:
    """Calculate Manhattan distance between two positions.

    Two positions are adjacent exactly when their Manhattan distance is 1.

    Args:
        a: First position
        b: Second position

    Returns:
        Sum of absolute row and column differences
    """
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
