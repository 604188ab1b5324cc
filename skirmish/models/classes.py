"""Character class, class descriptor and ability score models."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from skirmish.errors import AbilitiesParseError


class ClassGroup(str, Enum):
    """Attack progression families."""

    DIVINE = "divine"
    MARTIAL = "martial"
    ARCANE = "arcane"
    ROGUISH = "roguish"


class CharacterClass(str, Enum):
    """Playable character classes."""

    CLERIC = "cleric"
    DRUID = "druid"
    FIGHTER = "fighter"
    PALADIN = "paladin"
    RANGER = "ranger"
    MAGE = "mage"
    ILLUSIONIST = "illusionist"
    THIEF = "thief"
    ASSASSIN = "assassin"
    MONK = "monk"
    BARD = "bard"


class SingleClass(BaseModel):
    """One class at one level."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    kind: Literal["single"] = "single"
    character_class: CharacterClass = Field(description="Class")
    level: int = Field(ge=1, default=1, description="Class level")

    @property
    def level_hd(self) -> int:
        return self.level

    @property
    def is_leveled(self) -> bool:
        return True

    def at_level(self, level: int) -> "SingleClass":
        return self.model_copy(update={"level": max(1, level)})


class MultiClass(BaseModel):
    """Several classes sharing one level; the best attack rating among them applies."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    kind: Literal["multi"] = "multi"
    classes: list[CharacterClass] = Field(min_length=2, description="Member classes")
    level: int = Field(ge=1, default=1, description="Shared level")

    @property
    def level_hd(self) -> int:
        return self.level

    @property
    def is_leveled(self) -> bool:
        return True

    def at_level(self, level: int) -> "MultiClass":
        return self.model_copy(update={"level": max(1, level)})


class MonsterClass(BaseModel):
    """A monster rated by hit dice."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    kind: Literal["monster"] = "monster"
    magical: bool = Field(default=False, description="Whether the monster is magical")
    hit_dice: int = Field(ge=0, default=1, description="Hit dice")

    @property
    def level_hd(self) -> int:
        return self.hit_dice

    @property
    def is_leveled(self) -> bool:
        return False

    def at_level(self, hit_dice: int) -> "MonsterClass":
        return self.model_copy(update={"hit_dice": hit_dice})


ClassDescriptor = Annotated[
    Union[SingleClass, MultiClass, MonsterClass],
    Field(discriminator="kind"),
]


class Abilities(BaseModel):
    """The six ability scores."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Immutable model

    strength: int = Field(ge=0, alias="str", description="Strength")
    intelligence: int = Field(ge=0, alias="int", description="Intelligence")
    wisdom: int = Field(ge=0, alias="wis", description="Wisdom")
    dexterity: int = Field(ge=0, alias="dex", description="Dexterity")
    constitution: int = Field(ge=0, alias="con", description="Constitution")
    charisma: int = Field(ge=0, alias="cha", description="Charisma")

    @classmethod
    def parse(cls, text: str) -> "Abilities":
        """
        Parse ``str/int/wis/dex/con/cha``, e.g. ``"16/9/12/14/15/10"``.

        Raises:
            AbilitiesParseError: On a wrong field count or a non-numeric score
        """
        terms = [term.strip() for term in text.strip().split("/")]
        if len(terms) != 6:
            raise AbilitiesParseError(text, f"expected 6 scores, got {len(terms)}")
        if not all(term.isdecimal() for term in terms):
            raise AbilitiesParseError(text, "scores must be whole numbers")
        scores = [int(term) for term in terms]
        return cls(
            strength=scores[0],
            intelligence=scores[1],
            wisdom=scores[2],
            dexterity=scores[3],
            constitution=scores[4],
            charisma=scores[5],
        )

    def __str__(self) -> str:
        return "/".join(
            str(score)
            for score in (
                self.strength,
                self.intelligence,
                self.wisdom,
                self.dexterity,
                self.constitution,
                self.charisma,
            )
        )
