"""Tests for CombatantBuilder."""

import pytest

from skirmish.errors import AbilitiesParseError, AmountParseError, ClassParseError, MeterParseError
from skirmish.models import REQUIRED_FIELDS, BuilderField, Combatant, CombatantBuilder, Status

FIELD_TEXT = {
    BuilderField.CLASS: "f",
    BuilderField.LEVEL_HD: "3",
    BuilderField.HP: "24/24",
    BuilderField.ATTACKS: "1/1",
    BuilderField.AC: "2",
    BuilderField.TEAM: "1",
    BuilderField.INITIATIVE: "7",
}


class TestCombatantBuilder:
    """Test suite for CombatantBuilder."""

    def test_build_waits_for_every_required_field(self):
        """Test that build yields nothing until the last required field is set."""
        builder = CombatantBuilder(name="Brannoc")
        for field in REQUIRED_FIELDS:
            assert builder.build() is None
            builder = builder.with_field(field, FIELD_TEXT[field])
        combatant = builder.build()
        assert isinstance(combatant, Combatant)
        assert combatant.thac0 == 18
        assert combatant.status == Status.healthy()
        assert combatant.round == 1

    def test_each_field_is_required(self):
        """Test that leaving out any one required field blocks the build."""
        for missing in REQUIRED_FIELDS:
            builder = CombatantBuilder(name="Brannoc")
            for field in REQUIRED_FIELDS:
                if field != missing:
                    builder = builder.with_field(field, FIELD_TEXT[field])
            assert builder.build() is None
            assert builder.missing_field() == missing

    def test_missing_field_order(self):
        """Test that fields are requested in prompt order."""
        builder = CombatantBuilder(name="Brannoc")
        assert builder.missing_field() == BuilderField.CLASS
        builder = builder.with_field(BuilderField.CLASS, "t")
        assert builder.missing_field() == BuilderField.LEVEL_HD
        assert builder.missing_fields()[-1] == BuilderField.INITIATIVE

    def test_level_slot_overrides_class_text(self):
        """Test that the level/hd slot wins over a level in the class text."""
        builder = CombatantBuilder(name="Brannoc")
        for field in REQUIRED_FIELDS:
            text = "f9" if field == BuilderField.CLASS else FIELD_TEXT[field]
            builder = builder.with_field(field, text)
        combatant = builder.build()
        assert combatant.level_hd == 3
        assert combatant.thac0 == 18

    def test_optional_fields(self):
        """Test that abilities and xp bonus are carried but not required."""
        builder = CombatantBuilder(name="Brannoc")
        builder = builder.with_field(BuilderField.ABILITIES, "16/9/12/14/15/10")
        builder = builder.with_field(BuilderField.XP_BONUS, "y")
        for field in REQUIRED_FIELDS:
            builder = builder.with_field(field, FIELD_TEXT[field])
        combatant = builder.build()
        assert combatant.abilities.dexterity == 14
        assert combatant.xp_bonus is True

    def test_monster_build(self):
        """Test building a monster."""
        builder = CombatantBuilder(name="Ogre")
        for field in REQUIRED_FIELDS:
            text = "." if field == BuilderField.CLASS else FIELD_TEXT[field]
            builder = builder.with_field(field, text)
        combatant = builder.build()
        assert combatant.is_leveled is False
        assert combatant.thac0 == 18

    def test_builder_is_immutable(self):
        """Test that with_field returns a new builder."""
        builder = CombatantBuilder(name="Brannoc")
        builder.with_field(BuilderField.CLASS, "f")
        assert builder.classes is None

    @pytest.mark.parametrize(
        "field, text, error",
        [
            (BuilderField.CLASS, "zz", ClassParseError),
            (BuilderField.HP, "abc", MeterParseError),
            (BuilderField.ATTACKS, "1", MeterParseError),
            (BuilderField.HP, "-1/5", MeterParseError),
            (BuilderField.ATTACKS, "1/-2", MeterParseError),
            (BuilderField.TEAM, "-1", AmountParseError),
            (BuilderField.INITIATIVE, "fast", AmountParseError),
            (BuilderField.AC, "", AmountParseError),
            (BuilderField.ABILITIES, "10/10/10", AbilitiesParseError),
            (BuilderField.XP_BONUS, "maybe", AmountParseError),
        ],
    )
    def test_parse_errors(self, field, text, error):
        """Test that bad text for each field raises its parse error."""
        with pytest.raises(error):
            CombatantBuilder(name="Brannoc").with_field(field, text)

    def test_negative_armor_class(self):
        """Test that armor class may be negative."""
        assert CombatantBuilder(name="Brannoc").with_field(BuilderField.AC, "-2").ac == -2
