"""Tests for data models."""

import pytest

from combat_sim.models import Battle, BattleMap, Cell, Faction, Unit, UnitRegistry


def make_map(*rows: str) -> BattleMap:
    """Build a BattleMap from rows of '#' and '.'."""
    return BattleMap(cells=tuple(tuple(Cell(ch) for ch in row) for row in rows))


def make_unit(unit_id="E-00", faction=Faction.ELF, position=(1, 1), hp=200, attack_power=3):
    return Unit(id=unit_id, faction=faction, position=position, hp=hp, attack_power=attack_power)


class TestUnit:
    """Test Unit validation and helpers."""

    def test_valid_unit(self):
        unit = make_unit()
        assert unit.is_alive
        assert unit.faction.enemy is Faction.GOBLIN

    def test_negative_hp_rejected(self):
        with pytest.raises(ValueError, match="hp"):
            make_unit(hp=-1)

    def test_non_positive_attack_power_rejected(self):
        with pytest.raises(ValueError, match="attack_power"):
            make_unit(attack_power=0)

    def test_invalid_faction_rejected(self):
        with pytest.raises(ValueError, match="faction"):
            make_unit(faction="E")

    def test_negative_position_rejected(self):
        with pytest.raises(ValueError, match="position"):
            make_unit(position=(-1, 0))

    def test_enmity_is_faction_inequality(self):
        elf = make_unit("E-00", Faction.ELF, (1, 1))
        other_elf = make_unit("E-01", Faction.ELF, (1, 2))
        goblin = make_unit("G-00", Faction.GOBLIN, (1, 3))

        assert elf.is_enemy_of(goblin)
        assert goblin.is_enemy_of(elf)
        assert not elf.is_enemy_of(other_elf)


class TestBattleMap:
    """Test terrain queries."""

    def test_cell_at_and_bounds(self):
        battle_map = make_map("###", "#.#", "###")

        assert battle_map.cell_at((1, 1)) is Cell.OPEN
        assert battle_map.cell_at((0, 0)) is Cell.WALL
        assert battle_map.cell_at((5, 5)) is Cell.WALL  # Off the map
        assert battle_map.in_bounds((2, 2))
        assert not battle_map.in_bounds((3, 0))
        assert not battle_map.in_bounds((0, -1))

    def test_neighbors4_in_reading_order(self):
        battle_map = make_map("...", "...", "...")

        assert battle_map.neighbors4((1, 1)) == [(0, 1), (1, 0), (1, 2), (2, 1)]

    def test_neighbors4_clipped_at_edges(self):
        battle_map = make_map("...", "...")

        assert battle_map.neighbors4((0, 0)) == [(0, 1), (1, 0)]
        assert battle_map.neighbors4((1, 2)) == [(0, 2), (1, 1)]

    def test_non_rectangular_map_rejected(self):
        with pytest.raises(ValueError, match="rectangular"):
            make_map("###", "##")

    def test_empty_map_rejected(self):
        with pytest.raises(ValueError):
            BattleMap(cells=())

    def test_iter_cells_reading_order(self):
        battle_map = make_map("#.", ".#")

        assert list(battle_map.iter_cells()) == [
            ((0, 0), Cell.WALL),
            ((0, 1), Cell.OPEN),
            ((1, 0), Cell.OPEN),
            ((1, 1), Cell.WALL),
        ]

    def test_render_overlays_units_with_hp(self):
        battle_map = make_map("#####", "#...#", "#####")
        registry = UnitRegistry(
            [
                make_unit("E-00", Faction.ELF, (1, 1), hp=197),
                make_unit("G-00", Faction.GOBLIN, (1, 3)),
            ]
        )

        assert battle_map.render(registry) == "#####\n#E.G#   E(197), G(200)\n#####"
        assert battle_map.render(registry, with_hp=False) == "#####\n#E.G#\n#####"
        assert battle_map.render() == "#####\n#...#\n#####"


class TestUnitRegistry:
    """Test unit bookkeeping and the occupancy view."""

    def make_registry(self):
        return UnitRegistry(
            [
                make_unit("G-00", Faction.GOBLIN, (2, 1)),
                make_unit("E-00", Faction.ELF, (1, 3)),
                make_unit("E-01", Faction.ELF, (1, 1)),
            ]
        )

    def test_reading_order(self):
        registry = self.make_registry()

        ids = [u.id for u in registry.living_units_in_reading_order()]
        assert ids == ["E-01", "E-00", "G-00"]

    def test_unit_at_and_occupancy(self):
        registry = self.make_registry()

        assert registry.unit_at((2, 1)).id == "G-00"
        assert registry.unit_at((2, 2)) is None
        assert registry.is_occupied((1, 3))
        assert not registry.is_occupied((1, 2))

    def test_faction_counts(self):
        registry = self.make_registry()

        assert registry.faction_counts() == (2, 1)
        assert registry.has_enemies(Faction.ELF)
        assert [u.id for u in registry.enemies_of(Faction.GOBLIN)] == ["E-01", "E-00"]

    def test_enemies_of_single_faction(self):
        registry = UnitRegistry([make_unit()])

        assert not registry.has_enemies(Faction.ELF)
        assert registry.has_enemies(Faction.GOBLIN)
        assert registry.enemies_of(Faction.ELF) == []

    def test_move_updates_index(self):
        registry = self.make_registry()

        registry.move("E-00", (1, 2))

        assert registry.unit_at((1, 2)).id == "E-00"
        assert registry.unit_at((1, 3)) is None
        assert registry.get("E-00").position == (1, 2)

    def test_move_onto_occupied_cell_trips_assertion(self):
        registry = UnitRegistry(
            [make_unit("E-00", Faction.ELF, (1, 1)), make_unit("G-00", Faction.GOBLIN, (1, 2))]
        )

        with pytest.raises(AssertionError):
            registry.move("E-00", (1, 2))

    def test_move_to_non_adjacent_cell_trips_assertion(self):
        registry = self.make_registry()

        with pytest.raises(AssertionError):
            registry.move("E-00", (3, 3))

    def test_apply_damage_partial(self):
        registry = self.make_registry()

        removed = registry.apply_damage("G-00", 3)

        assert removed == 3
        assert registry.get("G-00").hp == 197
        assert registry.total_hp() == 597

    def test_apply_damage_kills_and_removes(self):
        registry = UnitRegistry([make_unit("G-00", Faction.GOBLIN, (2, 1), hp=2)])

        removed = registry.apply_damage("G-00", 3)

        # hp is capped at 0 and only 2 hp were actually removed
        assert removed == 2
        assert not registry.is_alive("G-00")
        assert registry.get("G-00") is None
        assert registry.unit_at((2, 1)) is None
        assert len(registry) == 0
        assert registry.fallen[0].id == "G-00"
        assert registry.fallen[0].hp == 0

    def test_duplicate_position_rejected(self):
        with pytest.raises(ValueError, match="share position"):
            UnitRegistry(
                [make_unit("E-00", Faction.ELF, (1, 1)), make_unit("G-00", Faction.GOBLIN, (1, 1))]
            )

    def test_duplicate_id_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            UnitRegistry([make_unit("E-00", position=(1, 1)), make_unit("E-00", position=(1, 2))])

    def test_dead_unit_rejected(self):
        with pytest.raises(ValueError, match="no hit points"):
            UnitRegistry([make_unit(hp=0)])


class TestBattle:
    """Test the Battle aggregate."""

    def test_unit_on_wall_rejected(self):
        battle_map = make_map("###", "#.#", "###")
        registry = UnitRegistry([make_unit(position=(0, 0))])

        with pytest.raises(ValueError, match="non-open"):
            Battle(battle_map=battle_map, registry=registry)

    def test_elf_losses(self):
        battle_map = make_map("####", "#..#", "####")
        registry = UnitRegistry(
            [make_unit("E-00", Faction.ELF, (1, 1), hp=3), make_unit("G-00", Faction.GOBLIN, (1, 2))]
        )
        battle = Battle(battle_map=battle_map, registry=registry)

        registry.apply_damage("E-00", 3)

        assert battle.initial_counts[Faction.ELF] == 1
        assert battle.elf_losses == 1

    def test_invalid_rounds_rejected(self):
        with pytest.raises(ValueError, match="rounds"):
            Battle(battle_map=make_map("."), registry=UnitRegistry(), rounds=-1)
