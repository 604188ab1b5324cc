"""Pytest configuration and fixtures."""

import pytest

from skirmish.models import BuilderField, CombatantBuilder


def build_combatant(
    name="Aldric",
    classes="f",
    level_hd=5,
    hp="20/20",
    attacks="2/2",
    ac=4,
    team=1,
    initiative=10,
    **updates,
):
    """Build a combatant through the builder, then apply any extra updates."""
    builder = CombatantBuilder(name=name)
    for field, text in (
        (BuilderField.CLASS, classes),
        (BuilderField.LEVEL_HD, level_hd),
        (BuilderField.HP, hp),
        (BuilderField.ATTACKS, attacks),
        (BuilderField.AC, ac),
        (BuilderField.TEAM, team),
        (BuilderField.INITIATIVE, initiative),
    ):
        builder = builder.with_field(field, str(text))
    combatant = builder.build()
    return combatant.model_copy(update=updates) if updates else combatant


@pytest.fixture
def make_combatant():
    """Factory for fully built combatants."""
    return build_combatant


@pytest.fixture
def fighter():
    """Level 5 fighter on team 1 with base initiative 15."""
    return build_combatant(name="Aldric", initiative=15)


@pytest.fixture
def goblin():
    """One hit dice monster on team 2 with base initiative 10."""
    return build_combatant(
        name="Goblin", classes=".", level_hd=1, hp="5/5", attacks="1/1", ac=6, team=2, initiative=10
    )


@pytest.fixture
def party_json():
    """Party file with a multi-classed elf and a magical monster."""
    return """
    [
        {"name": "Elowen", "level/hd": 4, "class": "F/MU", "hp": "18/22", "ac": 5,
         "abilities": {"str": 15, "int": 16, "wis": 10, "dex": 14, "con": 12, "cha": 11}},
        {"name": "Wight", "level/hd": 4, "class": "!", "hp": "26/26", "ac": 5, "attacks": "1/1"}
    ]
    """
