"""Tests for the battle outcome driver and Elf power search."""

import pytest

from combat_sim import part_one, part_two, run_battle
from combat_sim.engine import (
    NonTerminatingBattleError,
    PowerSearchExhaustedError,
    find_minimum_elf_power,
    load_battle,
    simulate,
)
from combat_sim.models import Faction
from tests.helpers.layouts import EXAMPLE_1, EXAMPLE_2, PART_ONE_CASES, PART_TWO_CASES


@pytest.mark.parametrize("layout,rounds,remaining_hp,score", PART_ONE_CASES)
def test_part_one_benchmarks(layout, rounds, remaining_hp, score):
    """Test outcome scores on the standard combat layouts."""
    outcome = run_battle(layout)

    assert outcome.completed_rounds == rounds
    assert outcome.remaining_hp == remaining_hp
    assert outcome.score == score
    assert part_one(layout) == score


@pytest.mark.parametrize("layout,power,rounds,remaining_hp,score", PART_TWO_CASES)
def test_part_two_benchmarks(layout, power, rounds, remaining_hp, score):
    """Test the minimum flawless Elf power and its outcome."""
    outcome = find_minimum_elf_power(layout)

    assert outcome.elf_attack_power == power
    assert outcome.completed_rounds == rounds
    assert outcome.remaining_hp == remaining_hp
    assert outcome.winner is Faction.ELF
    assert outcome.elves_survived
    assert outcome.score == score
    assert part_two(layout) == score


def test_example_1_goblins_win_by_default():
    """Test the winner and tuple form of the first benchmark."""
    outcome = run_battle(EXAMPLE_1)

    assert outcome.winner is Faction.GOBLIN
    assert outcome.elf_losses == 2
    assert outcome.as_tuple() == (47, 590, False)


def test_example_2_elves_win_with_losses():
    """Test that winning is not the same as surviving unscathed."""
    outcome = run_battle(EXAMPLE_2)

    assert outcome.winner is Faction.ELF
    assert not outcome.elves_survived
    assert not outcome.flawless_elf_victory


def test_replay_is_deterministic():
    """Test that replaying the same layout gives the same outcome."""
    first = run_battle(EXAMPLE_1, elf_attack_power=15)
    second = run_battle(EXAMPLE_1, elf_attack_power=15)

    assert first == second


def test_weaker_powers_lose_elves():
    """Test that every power below the minimum loses at least one Elf."""
    outcome = find_minimum_elf_power(EXAMPLE_1)

    for power in range(4, outcome.elf_attack_power):
        assert run_battle(EXAMPLE_1, elf_attack_power=power).elf_losses > 0


def test_stop_on_elf_death_aborts_run():
    """Test that a run is cut short once an Elf dies."""
    outcome = run_battle(EXAMPLE_1, stop_on_elf_death=True)
    full = run_battle(EXAMPLE_1)

    assert outcome.aborted
    assert outcome.winner is None
    assert outcome.elf_losses >= 1
    assert outcome.completed_rounds < full.completed_rounds


def test_battle_with_unreachable_factions_hits_round_cap():
    """Test that a battle that can never end fails loudly."""
    layout = """
#######
#E.#.G#
#######
"""
    with pytest.raises(NonTerminatingBattleError, match="50 rounds"):
        run_battle(layout, max_rounds=50)


def test_round_cap_not_hit_by_battle_ending_on_cap():
    """Test that a battle finishing within the cap is not reported as stuck."""
    outcome = run_battle("####\n#EG#\n####", elf_attack_power=100, max_rounds=2)

    assert outcome.completed_rounds == 2
    assert outcome.winner is Faction.ELF


def test_power_search_exhausted():
    """Test that the search gives up when Elves can't avoid losses."""
    layout = """
#####
#.G.#
#GEG#
#.G.#
#####
"""
    # Surrounded by four goblins the elf falls in round 17, before it can deal 200 damage
    with pytest.raises(PowerSearchExhaustedError):
        find_minimum_elf_power(layout, max_power=10)


def test_power_search_shares_observer_across_attempts():
    """Test that each attempt runs a fresh battle reported to the same observer."""
    round_ones = []

    def observer(battle, result):
        if result.round_number == 1:
            round_ones.append(battle.elf_attack_power)

    outcome = find_minimum_elf_power(EXAMPLE_1, observer=observer)

    assert round_ones == list(range(4, outcome.elf_attack_power + 1))


def test_simulate_on_loaded_battle():
    """Test that simulate runs an already loaded battle in place."""
    battle = load_battle(EXAMPLE_1)

    outcome = simulate(battle)

    assert battle.is_over
    assert battle.rounds == outcome.completed_rounds == 47


def test_battle_already_over():
    """Test a layout with only one faction ends with zero rounds."""
    outcome = run_battle("####\n#EE#\n####")

    assert outcome.completed_rounds == 0
    assert outcome.remaining_hp == 400
    assert outcome.score == 0
    assert outcome.winner is Faction.ELF
