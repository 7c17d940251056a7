"""Tests for the movement step of a unit's turn."""

from combat_sim.engine import load_battle
from combat_sim.engine.movement import MoveEvent, process_unit_movement
from tests.helpers.layouts import STEP_SELECTION_EXAMPLE


def test_unit_steps_toward_target():
    """Test that a unit moves one cell and the registry follows."""
    battle = load_battle(STEP_SELECTION_EXAMPLE)
    elf = battle.registry.get("E-00")

    event = process_unit_movement(battle, elf)

    assert event == MoveEvent(unit_id="E-00", origin=(1, 2), dest=(1, 3))
    assert elf.position == (1, 3)
    assert battle.registry.unit_at((1, 3)) is elf
    assert not battle.registry.is_occupied((1, 2))


def test_unit_in_range_stays_put():
    """Test that a unit adjacent to an enemy does not move."""
    battle = load_battle("#####\n#EG.#\n#####")
    elf = battle.registry.get("E-00")

    assert process_unit_movement(battle, elf) is None
    assert elf.position == (1, 1)


def test_unreachable_enemy_no_move():
    """Test that a unit walled off from every enemy stays put."""
    battle = load_battle("#######\n#E.#.G#\n#######")
    elf = battle.registry.get("E-00")

    assert process_unit_movement(battle, elf) is None
    assert elf.position == (1, 1)


def test_blocked_by_ally():
    """Test that allies block the only path to the enemy."""
    battle = load_battle("######\n#EE.G#\n######")
    rear = battle.registry.get("E-00")
    front = battle.registry.get("E-01")

    # The rear Elf's only route runs through its ally
    assert process_unit_movement(battle, rear) is None

    event = process_unit_movement(battle, front)
    assert event.dest == (1, 3)
