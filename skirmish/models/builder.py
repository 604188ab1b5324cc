"""Partially filled combatant, collected one field at a time."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from skirmish.errors import MeterParseError
from skirmish.models.classes import Abilities, ClassDescriptor
from skirmish.models.combatant import Combatant
from skirmish.models.meter import Meter
from skirmish.parsing.input_sanitizer import parse_amount, parse_flag, parse_integer


class BuilderField(str, Enum):
    """Fields the operator fills in on a new row."""

    CLASS = "class"
    LEVEL_HD = "level_hd"
    HP = "hp"
    ATTACKS = "attacks"
    AC = "ac"
    TEAM = "team"
    INITIATIVE = "initiative"
    ABILITIES = "abilities"
    XP_BONUS = "xp_bonus"


# Fields that must be set before the row becomes a combatant, in prompt order
REQUIRED_FIELDS = (
    BuilderField.CLASS,
    BuilderField.LEVEL_HD,
    BuilderField.HP,
    BuilderField.ATTACKS,
    BuilderField.AC,
    BuilderField.TEAM,
    BuilderField.INITIATIVE,
)

_SLOTS = {
    BuilderField.CLASS: "classes",
    BuilderField.LEVEL_HD: "level_hd",
    BuilderField.HP: "hp",
    BuilderField.ATTACKS: "attacks",
    BuilderField.AC: "ac",
    BuilderField.TEAM: "team",
    BuilderField.INITIATIVE: "initiative",
    BuilderField.ABILITIES: "abilities",
    BuilderField.XP_BONUS: "xp_bonus",
}


class CombatantBuilder(BaseModel):
    """A roster row still being filled in."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    row_type: Literal["building"] = "building"
    name: str = Field(min_length=1, description="Combatant name, set first")

    classes: Optional[ClassDescriptor] = Field(default=None, description="Class descriptor")
    level_hd: Optional[int] = Field(default=None, ge=0, description="Level or hit dice")
    hp: Optional[Meter] = Field(default=None, description="Health")
    attacks: Optional[Meter] = Field(default=None, description="Attacks per round")
    ac: Optional[int] = Field(default=None, description="Armor class")
    team: Optional[int] = Field(default=None, ge=0, description="Team id")
    initiative: Optional[int] = Field(default=None, ge=0, description="Base initiative roll")

    abilities: Optional[Abilities] = Field(default=None, description="Ability scores")
    xp_bonus: bool = Field(default=False, description="Whether earned xp gets the 10% bonus")

    def missing_fields(self) -> list[BuilderField]:
        """Required fields still unset, in prompt order."""
        return [field for field in REQUIRED_FIELDS if getattr(self, _SLOTS[field]) is None]

    def missing_field(self) -> Optional[BuilderField]:
        """The next field to ask the operator for, or None when complete."""
        missing = self.missing_fields()
        return missing[0] if missing else None

    def with_value(self, field: BuilderField, value) -> "CombatantBuilder":
        """Set a slot to an already parsed value."""
        return self.model_copy(update={_SLOTS[field]: value})

    def with_field(self, field: BuilderField, text: str) -> "CombatantBuilder":
        """
        Parse operator text for a field and set it.

        Raises:
            ParseError: If the text does not parse for this field
        """
        return self.with_value(field, self.parse_field(field, text))

    @staticmethod
    def parse_field(field: BuilderField, text: str):
        """Parse operator text into the value a field holds."""
        from skirmish.engine.class_table import ClassTable

        if field == BuilderField.CLASS:
            return ClassTable.parse_descriptor(text)
        if field in (BuilderField.HP, BuilderField.ATTACKS):
            meter = Meter.parse(text)
            if meter.current < 0 or meter.maximum < 0:
                raise MeterParseError(text, f"{field.value} cannot be negative")
            return meter
        if field == BuilderField.AC:
            return parse_integer(text, "armor class")
        if field == BuilderField.ABILITIES:
            return Abilities.parse(text)
        if field == BuilderField.XP_BONUS:
            return parse_flag(text)
        # level/hd, team and initiative
        return parse_amount(text, field.value)

    def build(self) -> Optional[Combatant]:
        """
        Convert to a Combatant once every required field is set.

        The level/hd slot overrides any level written in the class text, and
        the attack rating is computed here, once.

        Returns:
            The new Combatant, or None while a required field is missing
        """
        from skirmish.engine.class_table import ClassTable

        if self.missing_field() is not None:
            return None

        descriptor = self.classes.at_level(self.level_hd)
        return Combatant(
            name=self.name,
            classes=descriptor,
            thac0=ClassTable.rating(descriptor),
            abilities=self.abilities,
            hp=self.hp,
            attacks=self.attacks,
            ac=self.ac,
            team=self.team,
            initiative=self.initiative,
            xp_bonus=self.xp_bonus,
        )
