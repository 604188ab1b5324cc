"""Tests for Roster."""

import pytest

from skirmish.engine import Roster
from skirmish.errors import (
    MeterUnderflowError,
    NotBuilt,
    NotEnoughAttacks,
    NothingSelected,
    NotInCombat,
    RosterFull,
)
from skirmish.models import (
    BuilderField,
    Combatant,
    CombatantBuilder,
    CombatantTemplate,
    Meter,
    RosterSnapshot,
    Status,
)


def names(roster):
    return [row.name for row in roster.rows]


class TestSorting:
    """Test suite for roster ordering."""

    def test_higher_initiative_first(self, make_combatant):
        """Test that rows sort by effective initiative, highest first."""
        roster = Roster()
        roster.add_row(make_combatant(name="Slow", initiative=10))
        roster.add_row(make_combatant(name="Fast", initiative=15))
        assert names(roster) == ["Fast", "Slow"]
        assert [view.initiative for view in roster.view()] == [39, 34]

    def test_ties_keep_prior_order(self, make_combatant):
        """Test that equal initiatives keep their existing order."""
        roster = Roster()
        for name in ("First", "Second", "Third"):
            roster.add_row(make_combatant(name=name, initiative=9))
        assert names(roster) == ["First", "Second", "Third"]

    def test_stunned_rank_lower(self, make_combatant):
        """Test that a stun drops a combatant behind a healthy one."""
        roster = Roster()
        roster.add_row(make_combatant(name="Dazed", initiative=15, status=Status.stunned(2)))
        roster.add_row(make_combatant(name="Steady", initiative=5))
        assert names(roster) == ["Steady", "Dazed"]

    def test_builders_kept_after_ranked_rows(self, make_combatant):
        """Test that builders are never dropped and sit below combatants."""
        roster = Roster()
        roster.add_builder("Pending")
        roster.add_row(make_combatant(name="Ready", initiative=1))
        assert names(roster) == ["Ready", "Pending"]

    def test_dead_removed(self, make_combatant):
        """Test that sorting drops the dead."""
        roster = Roster()
        roster.add_row(make_combatant(name="Alive"))
        roster.add_row(make_combatant(name="Corpse", status=Status.dead()))
        assert names(roster) == ["Alive"]

    def test_sort_resets_cursor_and_selection(self, make_combatant):
        """Test that a sort returns the cursor to the top and clears the selection."""
        roster = Roster()
        roster.add_row(make_combatant(name="A", initiative=9))
        roster.add_row(make_combatant(name="B", initiative=8))
        roster.move_down()
        roster.select()
        roster.sort()
        assert roster.cursor == 0
        assert roster.selected is None

    def test_restore_keeps_saved_order(self, make_combatant):
        """Test that a restored snapshot is not re-sorted."""
        snapshot = RosterSnapshot(
            round=3,
            rows=[make_combatant(name="Low", initiative=1), make_combatant(name="High", initiative=15)],
        )
        roster = Roster(snapshot)
        assert roster.round == 3
        assert names(roster) == ["Low", "High"]


class TestRounds:
    """Test suite for round advancement."""

    def test_advance_round(self, make_combatant):
        """Test that a new round refreshes every combatant."""
        roster = Roster()
        roster.add_row(make_combatant(name="Dazed", attacks="0/2", status=Status.stunned(6)))
        roster.add_builder("Pending")
        roster.advance_round()
        assert roster.round == 2
        dazed = roster.rows[0]
        assert dazed.status == Status.healthy()
        assert dazed.attacks == Meter(current=2, maximum=2)
        assert dazed.round == 2
        assert isinstance(roster.rows[1], CombatantBuilder)

    def test_advance_round_drops_the_dead(self, fighter, goblin):
        """Test that a combatant killed this round is gone next round."""
        roster = Roster()
        roster.add_row(fighter)
        roster.add_row(goblin)
        roster.damage(1, 30)
        assert roster.rows[1].status.is_dead
        roster.advance_round()
        assert names(roster) == ["Aldric"]


class TestFilling:
    """Test suite for building rows in place."""

    def test_completing_a_builder(self, fighter):
        """Test that the last field turns the builder into a combatant."""
        roster = Roster()
        roster.add_row(fighter)
        roster.add_builder("Orc")
        index = 1
        for field, text in (
            (BuilderField.CLASS, "."),
            (BuilderField.LEVEL_HD, "1"),
            (BuilderField.HP, "6/6"),
            (BuilderField.ATTACKS, "1/1"),
            (BuilderField.AC, "6"),
            (BuilderField.TEAM, "2"),
        ):
            roster.fill_field(index, field, text)
        assert roster.missing_field(index) == BuilderField.INITIATIVE
        roster.fill_field(index, BuilderField.INITIATIVE, "20")
        assert isinstance(roster.rows[0], Combatant)
        assert names(roster) == ["Orc", "Aldric"]

    def test_assign_on_combatant(self, goblin):
        """Test that assignments update a finished combatant."""
        roster = Roster()
        roster.add_row(goblin)
        roster.assign_team(0, 4)
        roster.assign_initiative(0, 2)
        roster.set_xp_bonus(0, True)
        row = roster.rows[0]
        assert (row.team, row.initiative, row.xp_bonus) == (4, 2, True)

    def test_fill_class_on_combatant_recomputes(self, fighter):
        """Test that changing class on a combatant recomputes its rating at the same level."""
        roster = Roster()
        roster.add_row(fighter)
        roster.fill_field(0, BuilderField.CLASS, "mu")
        assert roster.rows[0].thac0 == 19
        assert roster.rows[0].level_hd == 5

    def test_set_level_keeps_rating(self, fighter):
        """Test that a level change through the roster keeps the rating."""
        roster = Roster()
        roster.add_row(fighter)
        roster.set_level(0, 12)
        assert roster.rows[0].level_hd == 12
        assert roster.rows[0].thac0 == 16


class TestCombat:
    """Test suite for attacks, damage and healing."""

    def _roster(self, *rows):
        roster = Roster()
        for row in rows:
            roster.add_row(row)
        return roster

    def test_attack(self, fighter, goblin):
        """Test that the selected row hits the cursor row."""
        roster = self._roster(fighter, goblin)
        roster.select()
        roster.move_down()
        roster.attack(3)
        attacker, target = roster.rows
        assert attacker.dealt == 3
        assert attacker.attacks.current == 1
        assert target.received == 3
        assert target.hp.current == 2
        assert target.status == Status.stunned(3)
        assert target.attacks.current == 0

    def test_attack_needs_selection(self, fighter, goblin):
        """Test that attacking with nobody selected fails."""
        roster = self._roster(fighter, goblin)
        with pytest.raises(NothingSelected):
            roster.attack(3)

    def test_exhausted_attacker_leaves_state_unchanged(self, make_combatant, goblin):
        """Test that a failed attack changes nothing."""
        roster = self._roster(make_combatant(attacks="0/1", initiative=15), goblin)
        roster.select()
        roster.move_down()
        before = roster.snapshot()
        with pytest.raises(NotEnoughAttacks):
            roster.attack(3)
        assert roster.snapshot() == before

    def test_target_failure_leaves_attacker_unchanged(self, make_combatant):
        """Test that an attack failing on the target does not charge the attacker."""
        attacker = make_combatant(name="A", attacks="2/2", initiative=15)
        target = make_combatant(name="B", team=2).model_copy(update={"attacks": Meter.parse("-1/2")})
        roster = self._roster(attacker, target)
        roster.select()
        roster.move_down()
        before = roster.snapshot()
        with pytest.raises(MeterUnderflowError):
            roster.attack(10)
        assert roster.snapshot() == before
        assert roster.rows[0].attacks.current == 2
        assert roster.rows[0].dealt == 0

    def test_attack_on_builder(self, fighter):
        """Test that a builder cannot be attacked."""
        roster = self._roster(fighter)
        roster.add_builder("Pending")
        roster.select()
        roster.move_down()
        with pytest.raises(NotBuilt):
            roster.attack(3)

    def test_attack_needs_combat_placement(self, fighter):
        """Test that a combatant loaded without team or initiative cannot fight."""
        loaded = CombatantTemplate(name="Elowen", level_hd=4, classes="F/MU", hp="18/22").to_combatant()
        roster = self._roster(fighter, loaded)
        roster.select()
        roster.move_down()
        with pytest.raises(NotInCombat):
            roster.attack(3)

    def test_damage_and_heal_need_built_rows(self):
        """Test that damage and heal refuse builders."""
        roster = Roster()
        roster.add_builder("Pending")
        with pytest.raises(NotBuilt):
            roster.damage(0, 3)
        with pytest.raises(NotBuilt):
            roster.heal(0, 3)

    def test_heal(self, make_combatant):
        """Test healing through the roster."""
        roster = self._roster(make_combatant(hp="3/20"))
        roster.heal(0, 4)
        assert roster.rows[0].hp.current == 7


class TestCursor:
    """Test suite for cursor and selection."""

    def test_cursor_clamps(self, fighter, goblin):
        """Test that the cursor stays inside the roster."""
        roster = Roster()
        roster.add_row(fighter)
        roster.add_row(goblin)
        roster.move_up()
        assert roster.cursor == 0
        roster.move_down()
        roster.move_down()
        assert roster.cursor == 1

    def test_select_and_deselect(self, fighter):
        """Test that select marks the cursor row."""
        roster = Roster()
        roster.add_row(fighter)
        roster.select()
        assert roster.selected == 0
        assert roster.view()[0].is_selected
        roster.deselect()
        assert roster.selected is None

    def test_select_on_empty_roster(self):
        """Test that there is nothing to select in an empty roster."""
        with pytest.raises(IndexError):
            Roster().select()


class TestBookkeeping:
    """Test suite for xp, duplication, reset and capacity."""

    def test_compute_xp_shares_team_damage_over_whole_roster(self, make_combatant):
        """Test that the team bonus divides by the total row count."""
        rows = [
            make_combatant(name="A", team=1, dealt=10),
            make_combatant(name="B", team=1, dealt=5),
            make_combatant(name="C", team=2, dealt=100),
            CombatantBuilder(name="Pending"),
        ]
        roster = Roster(RosterSnapshot(rows=rows))
        # own 10 * 10, bonus 200 // 4 + 100 // 4
        assert roster.compute_xp(0) == 175

    def test_compute_xp_on_builder(self):
        """Test that a builder has no xp."""
        roster = Roster()
        roster.add_builder("Pending")
        with pytest.raises(NotBuilt):
            roster.compute_xp(0)

    def test_selected_xp(self, make_combatant):
        """Test xp for the selected row."""
        roster = Roster()
        roster.add_row(make_combatant(dealt=2, received=1))
        assert roster.selected_xp() is None
        roster.select()
        # 2*10 + 1*20 + 40 // 1
        assert roster.selected_xp() == 80

    def test_duplicate_with_rename(self, goblin):
        """Test that duplicating adds a renamed copy."""
        roster = Roster()
        roster.add_row(goblin)
        roster.duplicate(0, "Goblin 2")
        assert names(roster) == ["Goblin", "Goblin 2"]
        assert roster.rows[1].hp == goblin.hp

    def test_duplicate_keeps_name(self, goblin):
        """Test that duplicating without a name copies it."""
        roster = Roster()
        roster.add_row(goblin)
        roster.duplicate(0)
        assert names(roster) == ["Goblin", "Goblin"]

    def test_reset_stats(self, make_combatant):
        """Test that reset clears every combatant's counters."""
        roster = Roster()
        roster.add_row(make_combatant(dealt=4, received=9))
        roster.add_builder("Pending")
        roster.reset_stats()
        assert (roster.rows[0].dealt, roster.rows[0].received) == (0, 0)

    def test_roster_full(self, fighter, goblin):
        """Test that the roster refuses rows beyond its capacity."""
        roster = Roster(max_rows=1)
        roster.add_row(fighter)
        with pytest.raises(RosterFull):
            roster.add_row(goblin)
        assert len(roster) == 1

    def test_snapshot_round_trip(self, fighter):
        """Test that a snapshot survives JSON."""
        roster = Roster()
        roster.add_row(fighter)
        roster.add_builder("Pending")
        snapshot = roster.snapshot()
        restored = RosterSnapshot.model_validate_json(snapshot.model_dump_json(by_alias=True))
        assert restored == snapshot
        assert isinstance(restored.rows[1], CombatantBuilder)

    def test_view_of_builder(self):
        """Test that a builder row reports what it still needs."""
        roster = Roster()
        roster.add_builder("Pending")
        view = roster.view()[0]
        assert view.is_building
        assert view.missing_field == BuilderField.CLASS
        assert view.is_cursor
